"""Difficulty estimation from a player's rolling statistics."""
from typing import Optional
from pydantic import BaseModel, Field

from logic_master.constants import (
    BASE_DIFFICULTY,
    MIN_DIFFICULTY,
    MAX_DIFFICULTY,
    TIME_FACTOR_MAX,
    RESPONSE_TIME_CEILING_SECONDS,
    ACCURACY_FACTOR_MAX,
    HISTORY_FACTOR_MAX,
    DOMAIN_FACTOR_MAX,
    NEUTRAL_RESPONSE_TIME,
    NEUTRAL_ACCURACY,
    NEUTRAL_HISTORY_PERFORMANCE,
    NEUTRAL_DOMAIN_STRENGTH,
    TREND_WINDOW,
)
from logic_master.schemas import LearningProfile, RollingStats


class DomainStrengths(BaseModel):
    current: Optional[float] = Field(default=None, ge=0.0, le=100.0)


class StatsSnapshot(BaseModel):
    """Inputs of the difficulty estimator."""
    average_response_time: float = Field(ge=0.0)
    accuracy_rate: float = Field(ge=0.0, le=1.0)
    history_performance: float = Field(ge=0.0, le=100.0)
    domain_strengths: Optional[DomainStrengths] = None


def estimate_difficulty(snapshot: StatsSnapshot) -> float:
    """
    Map a statistics snapshot to a difficulty scalar in [0.1, 1.0].

    Formula:
    - base 0.5
    - + time factor: up to 0.2, larger for faster average responses
    - + accuracy_rate * 0.3
    - + history_performance / 100 * 0.2
    - + domain_strengths.current / 100 * 0.1 (only when present)

    Args:
        snapshot: Player statistics snapshot

    Returns:
        Difficulty clamped to [MIN_DIFFICULTY, MAX_DIFFICULTY]
    """
    capped_time = min(snapshot.average_response_time, RESPONSE_TIME_CEILING_SECONDS)
    time_factor = min(
        TIME_FACTOR_MAX,
        (RESPONSE_TIME_CEILING_SECONDS - capped_time) / RESPONSE_TIME_CEILING_SECONDS * TIME_FACTOR_MAX
    )
    accuracy_factor = snapshot.accuracy_rate * ACCURACY_FACTOR_MAX
    history_factor = (snapshot.history_performance / 100) * HISTORY_FACTOR_MAX

    difficulty = BASE_DIFFICULTY + time_factor + accuracy_factor + history_factor

    if snapshot.domain_strengths is not None and snapshot.domain_strengths.current is not None:
        difficulty += (snapshot.domain_strengths.current / 100) * DOMAIN_FACTOR_MAX

    return min(max(difficulty, MIN_DIFFICULTY), MAX_DIFFICULTY)


def neutral_snapshot() -> StatsSnapshot:
    """Snapshot used before the player has finished any session."""
    return StatsSnapshot(
        average_response_time=NEUTRAL_RESPONSE_TIME,
        accuracy_rate=NEUTRAL_ACCURACY,
        history_performance=NEUTRAL_HISTORY_PERFORMANCE,
        domain_strengths=DomainStrengths(current=NEUTRAL_DOMAIN_STRENGTH),
    )


def snapshot_from_profile(stats: RollingStats, learning_profile: LearningProfile) -> StatsSnapshot:
    """
    Build the estimator input from persisted aggregates.

    History performance is the mean accuracy (as a percentage) of the most
    recent sessions. The current domain strength is the mean accuracy of the
    stored strengths and is omitted when there are none.
    """
    if stats.total_games == 0:
        return neutral_snapshot()

    recent = stats.historical_performance[-TREND_WINDOW:]
    if recent:
        history_performance = sum(entry.accuracy for entry in recent) / len(recent) * 100
    else:
        history_performance = stats.average_accuracy * 100

    domain_strengths = None
    if learning_profile.strengths:
        strengths = learning_profile.strengths
        domain_strengths = DomainStrengths(
            current=sum(entry.accuracy for entry in strengths) / len(strengths) * 100
        )

    return StatsSnapshot(
        average_response_time=stats.average_response_time,
        accuracy_rate=stats.average_accuracy,
        history_performance=history_performance,
        domain_strengths=domain_strengths,
    )
