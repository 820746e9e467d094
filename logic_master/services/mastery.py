"""Per-category mastery and strength/weakness classification."""
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Tuple

from logic_master.constants import PROFILE_LIST_LIMIT, STRENGTH_THRESHOLD, WEAKNESS_THRESHOLD
from logic_master.schemas import AnswerRecord, CategoryInsight, CategoryMastery, LearningProfile
from logic_master.services.scoring import is_timed, round_half_up


class MasteryBand(str, Enum):
    """Classification of a category's accuracy within one session."""
    STRENGTH = "strength"
    NEUTRAL = "neutral"
    WEAKNESS = "weakness"


class CategoryPerformance:
    """Running tally of one category's answers within a session."""

    def __init__(self, category: str):
        self.category = category
        self.correct = 0
        self.total = 0
        self.times: List[float] = []

    def add(self, answer: AnswerRecord) -> None:
        self.total += 1
        if answer.is_correct:
            self.correct += 1
        if is_timed(answer):
            self.times.append(answer.response_time)

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total else 0.0

    @property
    def average_response_time(self) -> float:
        """Mean over timed answers; 0 when the category has none."""
        return sum(self.times) / len(self.times) if self.times else 0.0

    def to_insight(self) -> CategoryInsight:
        return CategoryInsight(
            category=self.category,
            accuracy=self.accuracy,
            average_response_time=self.average_response_time,
        )


def group_by_category(answers: Sequence[AnswerRecord]) -> Dict[str, CategoryPerformance]:
    """Group answers by category, preserving first-seen order."""
    performance: Dict[str, CategoryPerformance] = {}
    for answer in answers:
        if answer.category not in performance:
            performance[answer.category] = CategoryPerformance(answer.category)
        performance[answer.category].add(answer)
    return performance


def classify_accuracy(accuracy: float) -> MasteryBand:
    """
    Classify a category accuracy.

    - accuracy >= 0.85: STRENGTH
    - accuracy < 0.70: WEAKNESS
    - otherwise: NEUTRAL
    """
    if accuracy >= STRENGTH_THRESHOLD:
        return MasteryBand.STRENGTH
    if accuracy < WEAKNESS_THRESHOLD:
        return MasteryBand.WEAKNESS
    return MasteryBand.NEUTRAL


def calculate_category_mastery(answers: Sequence[AnswerRecord]) -> Dict[str, CategoryMastery]:
    """
    Build the per-category mastery map shown on the results screen.

    Args:
        answers: All answer records of a session

    Returns:
        Mapping of category to correct/total counts and an integer mastery percentage
    """
    return {
        category: CategoryMastery(
            correct=perf.correct,
            total=perf.total,
            mastery=round_half_up(perf.accuracy * 100),
        )
        for category, perf in group_by_category(answers).items()
    }


def merge_insights(
    fresh: List[CategoryInsight],
    previous: List[CategoryInsight],
    exclude: Iterable[str] = (),
    limit: int = PROFILE_LIST_LIMIT
) -> List[CategoryInsight]:
    """
    Merge this session's entries in front of older ones.

    Older entries for a category that re-qualified this session are dropped, so
    the newest data wins; the combined list is truncated to ``limit``.

    Args:
        fresh: Entries qualified by this session
        previous: Stored entries
        exclude: Categories whose stored entries must be dropped because this
                 session placed them in the opposite list
        limit: Maximum list length
    """
    merged: List[CategoryInsight] = []
    seen = set(exclude)
    for entry in list(fresh) + list(previous):
        if entry.category in seen:
            continue
        seen.add(entry.category)
        merged.append(entry)
    return merged[:limit]


def update_learning_profile(
    profile: LearningProfile,
    answers: Sequence[AnswerRecord]
) -> Tuple[LearningProfile, Dict[str, CategoryMastery]]:
    """
    Fold a finished session into the learning profile.

    Args:
        profile: Current learning profile
        answers: All answer records of the finished session

    Returns:
        Tuple of (updated learning profile, per-category mastery map)
    """
    strengths: List[CategoryInsight] = []
    weaknesses: List[CategoryInsight] = []

    for perf in group_by_category(answers).values():
        band = classify_accuracy(perf.accuracy)
        if band == MasteryBand.STRENGTH:
            strengths.append(perf.to_insight())
        elif band == MasteryBand.WEAKNESS:
            weaknesses.append(perf.to_insight())

    strong = {entry.category for entry in strengths}
    weak = {entry.category for entry in weaknesses}

    updated = profile.model_copy(update={
        "strengths": merge_insights(strengths, profile.strengths, exclude=weak),
        "weaknesses": merge_insights(weaknesses, profile.weaknesses, exclude=strong),
    })
    return updated, calculate_category_mastery(answers)
