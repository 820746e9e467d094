"""Pydantic models for questions, sessions, statistics and the player profile.

Everything persisted lives inside ``UserProfile`` and round-trips through
``model_dump_json`` / ``model_validate_json`` without losing fields.
"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from logic_master.constants import HISTORY_LIMIT, PROFILE_LIST_LIMIT, SKIPPED_ANSWER_INDEX, STARTING_COINS


class Question(BaseModel):
    """A multiple-choice reasoning question."""
    model_config = ConfigDict(frozen=True)

    category: str
    difficulty: float = Field(ge=0.0, le=1.0)
    text: str
    options: List[str] = Field(min_length=2)
    correct_index: int = Field(ge=0)
    explanation: str = ""
    hint: Optional[str] = None

    @model_validator(mode="after")
    def check_correct_index(self):
        if self.correct_index >= len(self.options):
            raise ValueError("correct_index must point at one of the options")
        return self


class AnswerRecord(BaseModel):
    """Outcome of one question. Never mutated after creation."""
    model_config = ConfigDict(frozen=True)

    question_index: int = Field(ge=0)
    category: str
    difficulty: float = Field(ge=0.0, le=1.0)
    selected_index: int = Field(ge=SKIPPED_ANSWER_INDEX)
    correct_index: int = Field(ge=0)
    is_correct: bool
    response_time: float = Field(ge=0.0)

    @property
    def skipped(self) -> bool:
        return self.selected_index == SKIPPED_ANSWER_INDEX


class CategoryMastery(BaseModel):
    """Per-category tally for one session."""
    correct: int = Field(ge=0)
    total: int = Field(ge=0)
    mastery: int = Field(ge=0, le=100)


class SessionResult(BaseModel):
    """Summary of a completed session."""
    model_config = ConfigDict(frozen=True)

    mode: str
    score: int = Field(ge=0)
    accuracy: float = Field(ge=0.0, le=1.0)
    average_response_time: float = Field(ge=0.0)
    total_time: float = Field(ge=0.0)
    category_mastery: Dict[str, CategoryMastery] = Field(default_factory=dict)
    coins: int = Field(ge=0)
    xp: int = Field(ge=0)
    timestamp: datetime
    answers: List[AnswerRecord] = Field(default_factory=list)


class PerformanceEntry(BaseModel):
    """Trimmed session summary kept in the rolling performance log."""
    date: datetime
    score: int = Field(ge=0)
    accuracy: float = Field(ge=0.0, le=1.0)
    average_response_time: float = Field(ge=0.0)


class RollingStats(BaseModel):
    """Cross-session aggregates. Mutated only by the rolling statistics store."""
    total_games: int = Field(default=0, ge=0)
    total_correct: int = Field(default=0, ge=0)
    total_questions: int = Field(default=0, ge=0)
    total_score: int = Field(default=0, ge=0)
    best_score: int = Field(default=0, ge=0)
    average_accuracy: float = Field(default=0.0, ge=0.0, le=1.0)
    average_response_time: float = Field(default=0.0, ge=0.0)
    historical_performance: List[PerformanceEntry] = Field(default_factory=list, max_length=HISTORY_LIMIT)

    @model_validator(mode="after")
    def check_totals(self):
        if self.total_correct > self.total_questions:
            raise ValueError("total_correct cannot exceed total_questions")
        return self


class AchievementKind(str, Enum):
    """Rule kinds evaluated by the achievement tracker."""
    STREAK = "streak"
    ACCURACY = "accuracy"
    SPEED = "speed"
    VOLUME = "volume"


class Achievement(BaseModel):
    """An achievement with sticky completion."""
    id: str
    name: str
    description: str = ""
    kind: AchievementKind
    progress: int = Field(default=0, ge=0)
    target: int = Field(gt=0)
    completed: bool = False


class CategoryInsight(BaseModel):
    """A strength or weakness entry in the learning profile."""
    category: str
    accuracy: float = Field(ge=0.0, le=1.0)
    average_response_time: float = Field(default=0.0, ge=0.0)


class LearningTrends(BaseModel):
    """Signed trends over the most recent sessions. Positive means improving."""
    score: float
    accuracy: float
    response_time: float
    last_updated: datetime


class LearningProfile(BaseModel):
    """Strengths, weaknesses and stated interests of the player."""
    strengths: List[CategoryInsight] = Field(default_factory=list, max_length=PROFILE_LIST_LIMIT)
    weaknesses: List[CategoryInsight] = Field(default_factory=list, max_length=PROFILE_LIST_LIMIT)
    preferences: List[str] = Field(default_factory=list)
    learning_goals: List[str] = Field(default_factory=list)
    trends: Optional[LearningTrends] = None

    @field_validator("strengths", "weaknesses")
    @classmethod
    def no_duplicate_categories(cls, entries: List[CategoryInsight]) -> List[CategoryInsight]:
        categories = [entry.category for entry in entries]
        if len(categories) != len(set(categories)):
            raise ValueError("category listed more than once")
        return entries


class ProfileSettings(BaseModel):
    sound: bool = True
    notifications: bool = True
    theme: str = "light"


class UserProfile(BaseModel):
    """Everything persisted for the local player, stored as one JSON blob."""
    id: str
    username: str
    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    coins: int = Field(default=STARTING_COINS, ge=0)
    created_at: datetime
    last_login: datetime
    game_history: List[SessionResult] = Field(default_factory=list)
    achievements: List[Achievement] = Field(default_factory=list)
    settings: ProfileSettings = Field(default_factory=ProfileSettings)
    stats: RollingStats = Field(default_factory=RollingStats)
    learning_profile: LearningProfile = Field(default_factory=LearningProfile)


class DailyChallenge(BaseModel):
    """A fixed set of questions for one calendar day."""
    date: str  # ISO YYYY-MM-DD
    title: str
    description: str
    questions: List[Question]
