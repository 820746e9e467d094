"""Performance trends over recent sessions."""
from datetime import datetime, timezone
from typing import Optional, Sequence

from logic_master.constants import TREND_WINDOW
from logic_master.schemas import LearningTrends, RollingStats

# Trends within this band are reported as stable
STABLE_BAND = 0.01


def calculate_trend(values: Sequence[float]) -> Optional[float]:
    """
    Average step-to-step change across a chronological sequence.

    Args:
        values: Samples ordered oldest first

    Returns:
        Signed average delta (positive = rising), or None with fewer than 2 samples
    """
    if len(values) < 2:
        return None

    deltas = [later - earlier for earlier, later in zip(values, values[1:])]
    return sum(deltas) / len(deltas)


def analyze_trends(stats: RollingStats, now: Optional[datetime] = None) -> Optional[LearningTrends]:
    """
    Compute score, accuracy and response-time trends over the last sessions.

    The response-time trend is negated so that a positive value always means
    improvement.

    Returns:
        LearningTrends, or None when fewer than two sessions are logged
    """
    recent = stats.historical_performance[-TREND_WINDOW:]
    if len(recent) < 2:
        return None

    response_time_trend = calculate_trend([entry.average_response_time for entry in recent])

    return LearningTrends(
        score=calculate_trend([entry.score for entry in recent]),
        accuracy=calculate_trend([entry.accuracy for entry in recent]),
        response_time=-response_time_trend,
        last_updated=now or datetime.now(timezone.utc),
    )


def describe_trend(value: Optional[float]) -> str:
    """Label a trend value as 'up', 'down' or 'stable' for display."""
    if value is None or abs(value) < STABLE_BAND:
        return "stable"
    return "up" if value > 0 else "down"
