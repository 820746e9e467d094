"""Unit tests for difficulty estimation."""
import pytest

from conftest import FIXED_NOW
from logic_master.schemas import CategoryInsight, LearningProfile, PerformanceEntry, RollingStats
from logic_master.services.difficulty import (
    DomainStrengths,
    StatsSnapshot,
    estimate_difficulty,
    neutral_snapshot,
    snapshot_from_profile,
)


class TestEstimateDifficulty:
    """Tests for the difficulty formula."""

    def test_weakest_player_gets_base_difficulty(self):
        """Slow answers, no accuracy and no history leave only the base."""
        snapshot = StatsSnapshot(average_response_time=20, accuracy_rate=0.0, history_performance=0.0)
        assert estimate_difficulty(snapshot) == pytest.approx(0.5)

    def test_strong_player_is_capped_at_one(self):
        snapshot = StatsSnapshot(
            average_response_time=0,
            accuracy_rate=1.0,
            history_performance=100.0,
            domain_strengths=DomainStrengths(current=100.0),
        )
        assert estimate_difficulty(snapshot) == 1.0

    def test_time_factor_scales_with_speed(self):
        """5 seconds is half the ceiling, so half the 0.2 time factor."""
        snapshot = StatsSnapshot(average_response_time=5, accuracy_rate=0.0, history_performance=0.0)
        assert estimate_difficulty(snapshot) == pytest.approx(0.6)

    def test_accuracy_and_history_factors(self):
        snapshot = StatsSnapshot(average_response_time=10, accuracy_rate=0.5, history_performance=50.0)
        assert estimate_difficulty(snapshot) == pytest.approx(0.5 + 0.15 + 0.1)

    def test_domain_strength_only_counts_when_present(self):
        base = StatsSnapshot(average_response_time=10, accuracy_rate=0.0, history_performance=0.0)
        with_empty_domain = base.model_copy(update={"domain_strengths": DomainStrengths()})
        with_domain = base.model_copy(update={"domain_strengths": DomainStrengths(current=50.0)})

        assert estimate_difficulty(with_empty_domain) == pytest.approx(0.5)
        assert estimate_difficulty(with_domain) == pytest.approx(0.55)

    @pytest.mark.parametrize("response_time,accuracy,history", [
        (0.0, 0.0, 0.0),
        (3.0, 0.4, 20.0),
        (10.0, 1.0, 100.0),
        (120.0, 0.9, 10.0),
    ])
    def test_result_always_within_bounds(self, response_time, accuracy, history):
        snapshot = StatsSnapshot(
            average_response_time=response_time,
            accuracy_rate=accuracy,
            history_performance=history,
        )
        assert 0.1 <= estimate_difficulty(snapshot) <= 1.0


class TestSnapshotFromProfile:
    """Tests for building estimator input from stored aggregates."""

    def test_new_player_uses_neutral_snapshot(self):
        snapshot = snapshot_from_profile(RollingStats(), LearningProfile())
        assert snapshot == neutral_snapshot()

    def test_history_performance_is_recent_accuracy_percentage(self):
        stats = RollingStats(
            total_games=2,
            total_correct=15,
            total_questions=20,
            average_accuracy=0.75,
            average_response_time=4.0,
            historical_performance=[
                PerformanceEntry(date=FIXED_NOW, score=100, accuracy=0.5, average_response_time=4.0),
                PerformanceEntry(date=FIXED_NOW, score=200, accuracy=1.0, average_response_time=4.0),
            ],
        )
        profile = LearningProfile(strengths=[CategoryInsight(category="pattern", accuracy=0.9)])

        snapshot = snapshot_from_profile(stats, profile)

        assert snapshot.average_response_time == 4.0
        assert snapshot.accuracy_rate == 0.75
        assert snapshot.history_performance == pytest.approx(75.0)
        assert snapshot.domain_strengths.current == pytest.approx(90.0)

    def test_no_strengths_means_no_domain_strength(self):
        stats = RollingStats(total_games=1, total_correct=1, total_questions=2, average_accuracy=0.5)
        snapshot = snapshot_from_profile(stats, LearningProfile())

        assert snapshot.domain_strengths is None
        assert snapshot.history_performance == pytest.approx(50.0)
