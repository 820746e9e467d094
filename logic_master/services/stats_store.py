"""Rolling statistics: the only writer of a profile's ``RollingStats``."""
import logging

from logic_master.constants import HISTORY_LIMIT
from logic_master.schemas import PerformanceEntry, RollingStats, SessionResult

logger = logging.getLogger(__name__)


class InvalidSessionResult(ValueError):
    """Raised when a session result cannot be folded into statistics."""


class RollingStatisticsStore:
    """Owns a ``RollingStats`` value and mutates it once per finished session."""

    def __init__(self, stats: RollingStats):
        self.stats = stats

    def record_session(self, result: SessionResult) -> RollingStats:
        """
        Fold a finished session into the aggregates.

        Updates:
        - total_games, total_score, best_score
        - total_correct / total_questions and the derived average_accuracy
        - average_response_time as an incremental mean over all sessions;
          a session without timed answers contributes an average of 0
        - historical_performance, evicting the oldest entry past HISTORY_LIMIT

        Args:
            result: The finished session

        Returns:
            The updated statistics

        Raises:
            InvalidSessionResult: If the result is missing or has no answers
        """
        if result is None:
            raise InvalidSessionResult("session result is missing")
        if not result.answers:
            raise InvalidSessionResult("session result has no answers")

        stats = self.stats
        correct = sum(1 for answer in result.answers if answer.is_correct)

        stats.total_games += 1
        stats.total_score += result.score
        stats.best_score = max(stats.best_score, result.score)
        stats.total_correct += correct
        stats.total_questions += len(result.answers)
        stats.average_accuracy = stats.total_correct / stats.total_questions

        old_weight = (stats.total_games - 1) / stats.total_games
        new_weight = 1 / stats.total_games
        stats.average_response_time = (
            stats.average_response_time * old_weight + result.average_response_time * new_weight
        )

        stats.historical_performance.append(PerformanceEntry(
            date=result.timestamp,
            score=result.score,
            accuracy=result.accuracy,
            average_response_time=result.average_response_time,
        ))
        if len(stats.historical_performance) > HISTORY_LIMIT:
            del stats.historical_performance[:-HISTORY_LIMIT]

        logger.debug(
            f"Recorded session: games={stats.total_games}, score={result.score}, "
            f"accuracy={stats.average_accuracy:.3f}"
        )
        return stats
