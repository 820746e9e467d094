"""Session scoring state machine.

The session is an immutable ``SessionState`` value. Pure transition functions
take a state and return the next one; ``SessionScorer`` owns exactly one
current state and adds the time-based behaviour: per-question countdowns in
timed modes and the pause after each answer.

Every scheduled callback remembers the state's ``generation`` at schedule
time. Any transition bumps the generation, so a callback that fires after its
question has moved on finds a mismatch and does nothing.
"""
import logging
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, NamedTuple, Optional, Tuple

from logic_master.constants import (
    ANSWER_DISPLAY_DELAY_SECONDS,
    BASE_DIFFICULTY,
    QUESTION_TIME_LIMIT_SECONDS,
    SKIPPED_ANSWER_INDEX,
    TIMED_MODES,
)
from logic_master.schemas import AnswerRecord, Question, SessionResult
from logic_master.services.mastery import calculate_category_mastery
from logic_master.services.scheduler import ScheduledHandle, Scheduler
from logic_master.services.scoring import (
    AnswerScore,
    average_response_time,
    calculate_session_rewards,
    score_correct_answer,
)

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    AWAITING_ANSWER = "awaiting_answer"
    SCORING = "scoring"
    FINALIZING = "finalizing"


@dataclass(frozen=True)
class SessionState:
    generation: int = 0
    phase: Phase = Phase.IDLE
    mode: str = "single"
    difficulty: float = BASE_DIFFICULTY
    questions: Tuple[Question, ...] = ()
    answers: Tuple[AnswerRecord, ...] = ()
    question_index: int = 0
    score: int = 0
    streak: int = 0
    total_correct: int = 0
    started_at: Optional[float] = None
    question_started_at: Optional[float] = None

    @property
    def current_question(self) -> Optional[Question]:
        if self.phase in (Phase.IDLE, Phase.FINALIZING) or not self.questions:
            return None
        return self.questions[self.question_index]

    @property
    def is_last_question(self) -> bool:
        return self.question_index >= len(self.questions) - 1

    @property
    def is_timed(self) -> bool:
        return self.mode in TIMED_MODES


class AnswerOutcome(NamedTuple):
    record: AnswerRecord
    points: Optional[AnswerScore]
    score: int
    streak: int
    is_last_question: bool


def begin_session(
    state: SessionState,
    mode: str,
    questions: Tuple[Question, ...],
    difficulty: float,
    now: float
) -> SessionState:
    """Fresh session state, in progress, with no question shown yet."""
    return SessionState(
        generation=state.generation + 1,
        phase=Phase.IN_PROGRESS,
        mode=mode,
        difficulty=difficulty,
        questions=tuple(questions),
        started_at=now,
    )


def present_question(state: SessionState, index: int, now: float) -> SessionState:
    """Show question ``index`` and start timing it."""
    return replace(
        state,
        generation=state.generation + 1,
        phase=Phase.AWAITING_ANSWER,
        question_index=index,
        question_started_at=now,
    )


def apply_answer(state: SessionState, selected_index: int, now: float) -> Tuple[SessionState, AnswerOutcome]:
    """
    Score a submitted answer. The caller guarantees the state is awaiting an answer.

    Correct answers extend the streak and earn base, time and streak points;
    incorrect answers reset the streak and earn nothing.
    """
    question = state.questions[state.question_index]
    response_time = max(0.0, now - state.question_started_at)
    is_correct = selected_index == question.correct_index

    record = AnswerRecord(
        question_index=state.question_index,
        category=question.category,
        difficulty=question.difficulty,
        selected_index=selected_index,
        correct_index=question.correct_index,
        is_correct=is_correct,
        response_time=response_time,
    )

    points = None
    if is_correct:
        streak = state.streak + 1
        points = score_correct_answer(question.difficulty, response_time, streak)
        score = state.score + points.total
        total_correct = state.total_correct + 1
    else:
        streak = 0
        score = state.score
        total_correct = state.total_correct

    next_state = replace(
        state,
        generation=state.generation + 1,
        phase=Phase.SCORING,
        answers=state.answers + (record,),
        score=score,
        streak=streak,
        total_correct=total_correct,
    )
    outcome = AnswerOutcome(record, points, score, streak, state.is_last_question)
    return next_state, outcome


def apply_skip(state: SessionState) -> SessionState:
    """Record the current question as skipped and reset the streak."""
    question = state.questions[state.question_index]
    record = AnswerRecord(
        question_index=state.question_index,
        category=question.category,
        difficulty=question.difficulty,
        selected_index=SKIPPED_ANSWER_INDEX,
        correct_index=question.correct_index,
        is_correct=False,
        response_time=0.0,
    )
    return replace(
        state,
        generation=state.generation + 1,
        phase=Phase.SCORING,
        answers=state.answers + (record,),
        streak=0,
    )


def build_result(state: SessionState, now: float, timestamp: datetime) -> SessionResult:
    """Summarize a finished session."""
    total_questions = len(state.questions)
    accuracy = state.total_correct / total_questions if total_questions else 0.0
    total_time = max(0.0, now - state.started_at)
    rewards = calculate_session_rewards(state.score, accuracy, total_time)

    return SessionResult(
        mode=state.mode,
        score=state.score,
        accuracy=accuracy,
        average_response_time=average_response_time(state.answers),
        total_time=total_time,
        category_mastery=calculate_category_mastery(state.answers),
        coins=rewards.coins,
        xp=rewards.xp,
        timestamp=timestamp,
        answers=list(state.answers),
    )


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionScorer:
    """Drives one session at a time through the scoring state machine.

    Args:
        scheduler: Source of cancellable delayed callbacks
        on_finalize: Receives the SessionResult when a session completes
        clock: Monotonic seconds, used for response and session times
        timestamp_factory: Wall-clock time stamped on results
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_finalize: Optional[Callable[[SessionResult], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        timestamp_factory: Callable[[], datetime] = utc_now,
        time_limit: float = QUESTION_TIME_LIMIT_SECONDS,
        display_delay: float = ANSWER_DISPLAY_DELAY_SECONDS,
    ):
        self._scheduler = scheduler
        self._on_finalize = on_finalize
        self._clock = clock
        self._timestamp_factory = timestamp_factory
        self._time_limit = time_limit
        self._display_delay = display_delay
        self._state = SessionState()
        self._countdown: Optional[ScheduledHandle] = None
        self._pending_advance: Optional[ScheduledHandle] = None
        self.last_result: Optional[SessionResult] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state.phase != Phase.IDLE

    def time_left(self) -> Optional[float]:
        """Seconds left on the current countdown, or None when no countdown runs."""
        state = self._state
        if state.phase != Phase.AWAITING_ANSWER or not state.is_timed:
            return None
        elapsed = self._clock() - state.question_started_at
        return max(0.0, self._time_limit - elapsed)

    def start_game(self, mode: str, questions, difficulty: float) -> bool:
        """
        Reset session state and show the first question.

        Any running session is abandoned without recording a result.

        Returns:
            False if ``questions`` is empty, True otherwise
        """
        if not questions:
            return False

        self._cancel_timers()
        self._state = begin_session(self._state, mode, tuple(questions), difficulty, self._clock())
        logger.info(
            f"Session started: mode={mode}, questions={len(questions)}, difficulty={difficulty:.2f}",
            extra={"mode": mode, "session_generation": self._state.generation}
        )
        self._show_question(0)
        return True

    def submit_answer(self, selected_index: int) -> Optional[AnswerOutcome]:
        """
        Answer the current question.

        Returns:
            AnswerOutcome, or None when no question is awaiting an answer or the
            index is not one of the options
        """
        state = self._state
        if state.phase != Phase.AWAITING_ANSWER:
            return None
        if not 0 <= selected_index < len(state.current_question.options):
            return None

        self._cancel_timers()
        self._state, outcome = apply_answer(state, selected_index, self._clock())
        logger.debug(
            f"Answer recorded: correct={outcome.record.is_correct}, score={outcome.score}",
            extra={"question_index": outcome.record.question_index}
        )

        generation = self._state.generation
        self._pending_advance = self._scheduler.schedule(
            self._display_delay, lambda: self._on_display_delay_elapsed(generation)
        )
        return outcome

    def skip_question(self) -> bool:
        """
        Skip the current question and move on immediately.

        Returns:
            False when no question is awaiting an answer
        """
        if self._state.phase != Phase.AWAITING_ANSWER:
            return False

        self._cancel_timers()
        self._state = apply_skip(self._state)
        self._advance()
        return True

    def abort(self) -> bool:
        """Abandon the running session without recording it."""
        if self._state.phase == Phase.IDLE:
            return False

        self._cancel_timers()
        self._state = replace(self._state, generation=self._state.generation + 1, phase=Phase.IDLE)
        logger.info("Session aborted", extra={"session_generation": self._state.generation})
        return True

    def _show_question(self, index: int) -> None:
        self._state = present_question(self._state, index, self._clock())
        if self._state.is_timed:
            generation = self._state.generation
            self._countdown = self._scheduler.schedule(
                self._time_limit, lambda: self._on_countdown_expired(generation)
            )

    def _advance(self) -> None:
        if self._state.is_last_question:
            self._finalize()
        else:
            self._show_question(self._state.question_index + 1)

    def _on_countdown_expired(self, generation: int) -> None:
        if generation != self._state.generation:
            return
        logger.debug("Countdown expired", extra={"question_index": self._state.question_index})
        self._countdown = None
        self.skip_question()

    def _on_display_delay_elapsed(self, generation: int) -> None:
        if generation != self._state.generation or self._state.phase != Phase.SCORING:
            return
        self._pending_advance = None
        self._advance()

    def _finalize(self) -> SessionResult:
        self._state = replace(self._state, generation=self._state.generation + 1, phase=Phase.FINALIZING)
        result = build_result(self._state, self._clock(), self._timestamp_factory())
        self.last_result = result

        try:
            logger.info(
                f"Session finished: score={result.score}, accuracy={result.accuracy:.2f}",
                extra={"mode": result.mode, "session_generation": self._state.generation}
            )
            if self._on_finalize is not None:
                self._on_finalize(result)
        finally:
            self._state = replace(self._state, generation=self._state.generation + 1, phase=Phase.IDLE)

        return result

    def _cancel_timers(self) -> None:
        for handle in (self._countdown, self._pending_advance):
            if handle is not None:
                handle.cancel()
        self._countdown = None
        self._pending_advance = None
