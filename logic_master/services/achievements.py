"""Achievement rules evaluated once per finished session."""
import logging
from typing import Callable, Dict, List

from logic_master.schemas import Achievement, AchievementKind, RollingStats, SessionResult
from logic_master.services.scoring import longest_streak, round_half_up

logger = logging.getLogger(__name__)

# Upper bound of the speed achievement's progress bar
SPEED_PROGRESS_CAP = 100


def default_achievements() -> List[Achievement]:
    """Achievements every new profile starts with."""
    return [
        Achievement(
            id="streak-10",
            name="Streak Star",
            description="Answer 10 questions in a row correctly in one game",
            kind=AchievementKind.STREAK,
            target=10,
        ),
        Achievement(
            id="accuracy-90",
            name="Precise Thinker",
            description="Reach 90% accuracy in a game",
            kind=AchievementKind.ACCURACY,
            target=90,
        ),
        Achievement(
            id="speed-5",
            name="Lightning Mind",
            description="Average under 5 seconds per answer in a game",
            kind=AchievementKind.SPEED,
            target=5,
        ),
        Achievement(
            id="games-50",
            name="Logic Addict",
            description="Finish 50 games",
            kind=AchievementKind.VOLUME,
            target=50,
        ),
    ]


def apply_streak_rule(achievement: Achievement, result: SessionResult, stats: RollingStats) -> None:
    achievement.progress = max(achievement.progress, longest_streak(result.answers))
    achievement.completed = achievement.completed or achievement.progress >= achievement.target


def apply_accuracy_rule(achievement: Achievement, result: SessionResult, stats: RollingStats) -> None:
    achievement.progress = max(achievement.progress, round_half_up(result.accuracy * 100))
    achievement.completed = achievement.completed or achievement.progress >= achievement.target


def apply_speed_rule(achievement: Achievement, result: SessionResult, stats: RollingStats) -> None:
    """
    Progress shows target / average time as a percentage, capped at 100.

    Completion is judged from the session's average time directly, not from
    progress. A session without timed answers averages 0 and so completes.
    """
    average = result.average_response_time
    ratio = round_half_up(achievement.target / max(average, 1) * 100)
    achievement.progress = min(SPEED_PROGRESS_CAP, max(achievement.progress, ratio))
    achievement.completed = achievement.completed or average <= achievement.target


def apply_volume_rule(achievement: Achievement, result: SessionResult, stats: RollingStats) -> None:
    achievement.progress = max(achievement.progress, min(stats.total_games, achievement.target))
    achievement.completed = achievement.completed or achievement.progress >= achievement.target


RULES: Dict[AchievementKind, Callable[[Achievement, SessionResult, RollingStats], None]] = {
    AchievementKind.STREAK: apply_streak_rule,
    AchievementKind.ACCURACY: apply_accuracy_rule,
    AchievementKind.SPEED: apply_speed_rule,
    AchievementKind.VOLUME: apply_volume_rule,
}


def update_achievements(
    achievements: List[Achievement],
    result: SessionResult,
    stats: RollingStats
) -> List[Achievement]:
    """
    Evaluate every achievement against a finished session, in place.

    ``stats`` must already include the session, so volume rules see the
    updated game count.

    Args:
        achievements: Achievement list to update
        result: The finished session
        stats: Rolling statistics after recording the session

    Returns:
        Achievements that became completed during this call
    """
    unlocked = []
    for achievement in achievements:
        was_completed = achievement.completed
        RULES[achievement.kind](achievement, result, stats)

        if achievement.completed and not was_completed:
            unlocked.append(achievement)
            logger.info(
                f"Achievement unlocked: {achievement.id}",
                extra={"achievement_id": achievement.id}
            )
    return unlocked
