"""Pytest fixtures for testing."""
from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from logic_master.db.database import Base
from logic_master.db import models  # noqa: F401
from logic_master.schemas import AnswerRecord, Question, SessionResult
from logic_master.services.game_service import GameService
from logic_master.services.mastery import calculate_category_mastery
from logic_master.services.notifier import NotificationFeed
from logic_master.services.profile_store import ProfileStore
from logic_master.services.scoring import average_response_time

FIXED_NOW = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)
FIXED_TODAY = date(2026, 3, 14)


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScheduledJob:
    def __init__(self, due: float, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by a FakeClock; callbacks run only when time is advanced."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.jobs = []

    def schedule(self, delay, callback):
        job = ScheduledJob(self.clock() + delay, callback)
        self.jobs.append(job)
        return job

    @property
    def pending(self):
        return [job for job in self.jobs if not job.cancelled and not job.fired]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due callbacks in order."""
        target = self.clock.now + seconds
        while True:
            due = sorted((job for job in self.pending if job.due <= target), key=lambda job: job.due)
            if not due:
                break
            job = due[0]
            self.clock.now = max(self.clock.now, job.due)
            job.fired = True
            job.callback()
        self.clock.now = target


class TimestampSequence:
    """Wall-clock factory returning one minute later on each call."""

    def __init__(self, start: datetime = FIXED_NOW):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        return value


@pytest.fixture(scope="function")
def session_factory():
    """Session factory bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    yield factory

    engine.dispose()


@pytest.fixture
def store(session_factory):
    return ProfileStore(session_factory, profile_key="testProfile")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock)


@pytest.fixture
def game_service(store, scheduler, clock):
    """Game service with a manual scheduler, fake clock and fixed calendar."""
    return GameService(
        store=store,
        scheduler=scheduler,
        notifier=NotificationFeed(),
        clock=clock,
        timestamp_factory=TimestampSequence(),
        today=lambda: FIXED_TODAY,
    )


def make_question(category="deduction", difficulty=0.5, correct_index=1, hint="Think it through"):
    return Question(
        category=category,
        difficulty=difficulty,
        text=f"A {category} question",
        options=["A", "B", "C", "D"],
        correct_index=correct_index,
        explanation="Because.",
        hint=hint,
    )


def make_answer(category="deduction", is_correct=True, response_time=3.0, difficulty=0.5, skipped=False):
    return AnswerRecord(
        question_index=0,
        category=category,
        difficulty=difficulty,
        selected_index=-1 if skipped else (1 if is_correct else 0),
        correct_index=1,
        is_correct=is_correct and not skipped,
        response_time=0.0 if skipped else response_time,
    )


def make_result(answers, score=100, mode="single", timestamp=FIXED_NOW, total_time=60.0):
    """SessionResult whose accuracy and average time are derived from ``answers``."""
    correct = sum(1 for answer in answers if answer.is_correct)
    return SessionResult(
        mode=mode,
        score=score,
        accuracy=correct / len(answers) if answers else 0.0,
        average_response_time=average_response_time(answers),
        total_time=total_time,
        category_mastery=calculate_category_mastery(answers),
        coins=0,
        xp=0,
        timestamp=timestamp,
        answers=answers,
    )
