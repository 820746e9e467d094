"""Unit tests for performance trends."""
from datetime import timedelta

import pytest

from conftest import FIXED_NOW
from logic_master.schemas import PerformanceEntry, RollingStats
from logic_master.services.trend import analyze_trends, calculate_trend, describe_trend


def stats_with_history(entries):
    history = [
        PerformanceEntry(
            date=FIXED_NOW + timedelta(minutes=i),
            score=score,
            accuracy=accuracy,
            average_response_time=response_time,
        )
        for i, (score, accuracy, response_time) in enumerate(entries)
    ]
    return RollingStats(total_games=len(history), historical_performance=history)


class TestCalculateTrend:
    """Tests for the average step delta."""

    def test_needs_two_samples(self):
        assert calculate_trend([]) is None
        assert calculate_trend([5.0]) is None

    def test_rising_sequence(self):
        assert calculate_trend([1, 2, 4]) == pytest.approx(1.5)

    def test_falling_sequence(self):
        assert calculate_trend([10, 8, 6, 4]) == pytest.approx(-2.0)


class TestAnalyzeTrends:
    """Tests for trends over the recent history window."""

    def test_single_session_has_no_trends(self):
        assert analyze_trends(stats_with_history([(100, 0.5, 5.0)])) is None

    def test_faster_answers_are_a_positive_trend(self):
        stats = stats_with_history([(100, 0.5, 8.0), (200, 0.7, 6.0), (300, 0.9, 4.0)])

        trends = analyze_trends(stats, now=FIXED_NOW)

        assert trends.score == pytest.approx(100.0)
        assert trends.accuracy == pytest.approx(0.2)
        assert trends.response_time == pytest.approx(2.0)
        assert trends.last_updated == FIXED_NOW

    def test_only_last_five_sessions_count(self):
        """An old outlier outside the window does not affect the trend."""
        stats = stats_with_history([(5000, 0.1, 30.0)] + [(100, 0.5, 5.0)] * 5)

        trends = analyze_trends(stats)

        assert trends.score == 0
        assert trends.accuracy == 0
        assert trends.response_time == 0


class TestDescribeTrend:
    """Tests for trend labels."""

    def test_labels(self):
        assert describe_trend(None) == "stable"
        assert describe_trend(0.001) == "stable"
        assert describe_trend(0.5) == "up"
        assert describe_trend(-3) == "down"
