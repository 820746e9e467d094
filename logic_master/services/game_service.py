"""Game orchestration: profile loading, sessions, rewards and persistence."""
import logging
import time
from datetime import date, datetime
from enum import Enum
from typing import Callable, List, Optional, Tuple

from logic_master.constants import (
    BASE_DIFFICULTY,
    DEFAULT_HINT,
    DEFAULT_QUESTION_COUNT,
    GAME_MODES,
    HINT_COST,
    MAX_QUESTION_COUNT,
)
from logic_master.schemas import SessionResult, UserProfile
from logic_master.services.achievements import update_achievements
from logic_master.services.adaptive import recommend_categories
from logic_master.services.daily_challenge import get_daily_challenge
from logic_master.services.difficulty import estimate_difficulty, snapshot_from_profile
from logic_master.services.level_progression import add_coins, add_experience, deduct_coins
from logic_master.services.mastery import update_learning_profile
from logic_master.services.notifier import NotificationFeed, Notifier, Severity
from logic_master.services.profile_store import ProfileStore, create_default_profile
from logic_master.services.quiz_generator import generate_session_questions
from logic_master.services.scheduler import Scheduler
from logic_master.services.session import AnswerOutcome, Phase, SessionScorer, utc_now
from logic_master.services.stats_store import RollingStatisticsStore
from logic_master.services.trend import analyze_trends

logger = logging.getLogger(__name__)


class HintStatus(str, Enum):
    GRANTED = "granted"
    NOT_AVAILABLE = "not_available"
    INSUFFICIENT_COINS = "insufficient_coins"


class GameService:
    """
    Owns the local player's profile and the session scorer.

    Finished sessions flow into the rolling statistics, achievements, learning
    profile, trends, coins and experience, and the profile is saved.

    Args:
        store: Persistent key-value store
        scheduler: Scheduler for countdowns and answer display delays
        notifier: Receives player-facing messages
        clock: Monotonic seconds for response times
        timestamp_factory: Wall-clock time for results and logins
        today: Calendar date used for the daily challenge
    """

    def __init__(
        self,
        store: ProfileStore,
        scheduler: Scheduler,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], float] = time.monotonic,
        timestamp_factory: Callable[[], datetime] = utc_now,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.notifier = notifier if notifier is not None else NotificationFeed()
        self._timestamp_factory = timestamp_factory
        self._today = today
        self._profile: Optional[UserProfile] = None
        self.scorer = SessionScorer(
            scheduler,
            on_finalize=self._record_session,
            clock=clock,
            timestamp_factory=timestamp_factory,
        )

    @property
    def profile(self) -> UserProfile:
        if self._profile is None:
            return self.load_profile()
        return self._profile

    def load_profile(self) -> UserProfile:
        """
        Load the stored profile, substituting a fresh one when absent or corrupt.

        Returns:
            The active profile
        """
        profile = self.store.load()
        if profile is None:
            profile = create_default_profile()
            logger.info("Created new profile", extra={"profile_id": profile.id})
        else:
            logger.info("Profile loaded from storage", extra={"profile_id": profile.id})

        profile.last_login = self._timestamp_factory()
        self._profile = profile
        self.store.save(profile)
        return profile

    def next_difficulty(self) -> float:
        profile = self.profile
        return estimate_difficulty(snapshot_from_profile(profile.stats, profile.learning_profile))

    def start_game(self, mode: str = "single", question_count: int = DEFAULT_QUESTION_COUNT) -> bool:
        """
        Start a session with questions tailored to the profile.

        Returns:
            False if the mode is unknown or the question count is out of range
        """
        if mode not in GAME_MODES or not 1 <= question_count <= MAX_QUESTION_COUNT:
            return False

        difficulty = self.next_difficulty()
        categories = recommend_categories(self.profile.learning_profile)
        questions = generate_session_questions(question_count, difficulty, categories)
        return self.scorer.start_game(mode, questions, difficulty)

    def start_daily_challenge(self) -> bool:
        """Start today's daily challenge (timed, fixed questions)."""
        challenge = get_daily_challenge(self.store, self._today())
        return self.scorer.start_game("daily", challenge.questions, BASE_DIFFICULTY)

    def submit_answer(self, selected_index: int) -> Optional[AnswerOutcome]:
        outcome = self.scorer.submit_answer(selected_index)
        if outcome is not None:
            if outcome.record.is_correct:
                self.notifier.notify("Correct answer!", Severity.SUCCESS)
            else:
                self.notifier.notify("Wrong answer!", Severity.ERROR)
        return outcome

    def skip_question(self) -> bool:
        return self.scorer.skip_question()

    def abort(self) -> bool:
        return self.scorer.abort()

    def request_hint(self) -> Tuple[HintStatus, Optional[str]]:
        """
        Buy a hint for the current question.

        Returns:
            (status, hint text); the text is None unless status is GRANTED
        """
        state = self.scorer.state
        if state.phase != Phase.AWAITING_ANSWER:
            return HintStatus.NOT_AVAILABLE, None

        profile = self.profile
        if not deduct_coins(profile, HINT_COST):
            self.notifier.notify("Not enough coins for a hint", Severity.ERROR)
            return HintStatus.INSUFFICIENT_COINS, None

        self.store.save(profile)
        return HintStatus.GRANTED, state.current_question.hint or DEFAULT_HINT

    def recent_history(self, limit: int) -> List[SessionResult]:
        """Most recent sessions, newest first."""
        history = sorted(self.profile.game_history, key=lambda result: result.timestamp, reverse=True)
        return history[:limit]

    def _record_session(self, result: SessionResult) -> None:
        profile = self.profile

        RollingStatisticsStore(profile.stats).record_session(result)
        unlocked = update_achievements(profile.achievements, result, profile.stats)

        learning_profile, _ = update_learning_profile(profile.learning_profile, result.answers)
        trends = analyze_trends(profile.stats, now=result.timestamp)
        if trends is not None:
            learning_profile.trends = trends
        profile.learning_profile = learning_profile

        profile.game_history.append(result)
        add_coins(profile, result.coins)
        level_ups = add_experience(profile, result.xp)

        for achievement in unlocked:
            self.notifier.notify(f"Achievement unlocked: {achievement.name}", Severity.SUCCESS)
        for level_up in level_ups:
            self.notifier.notify(f"Level up! You reached level {level_up['to_level']}", Severity.SUCCESS)
        self.notifier.notify(
            f"Game over: {result.score} points, +{result.coins} coins, +{result.xp} XP", Severity.INFO
        )

        if not self.store.save(profile):
            self.notifier.notify("Your progress could not be saved", Severity.ERROR)
