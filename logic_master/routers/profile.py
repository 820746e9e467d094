"""Player profile, statistics and notification endpoints."""
from fastapi import APIRouter, Depends

from logic_master.constants import RECENT_HISTORY_DISPLAY_LIMIT
from logic_master.routers.game import get_game_service
from logic_master.services.game_service import GameService
from logic_master.services.level_progression import get_level_progress
from logic_master.services.trend import describe_trend

router = APIRouter(prefix="/api", tags=["profile"])


@router.get("/profile")
async def get_profile(service: GameService = Depends(get_game_service)):
    """
    Return the player summary.

    Returns:
    - identity, level, experience and coins
    - progress toward the next level
    - settings
    """
    profile = service.profile
    return {
        "id": profile.id,
        "username": profile.username,
        "level": profile.level,
        "experience": profile.experience,
        "coins": profile.coins,
        "created_at": profile.created_at.isoformat(),
        "last_login": profile.last_login.isoformat(),
        "level_progress": get_level_progress(profile),
        "settings": profile.settings.model_dump(),
    }


@router.get("/profile/stats")
async def get_stats(service: GameService = Depends(get_game_service)):
    """
    Return rolling statistics and the learning profile.

    Returns:
    - lifetime totals and running averages
    - strengths and weaknesses by category
    - score, accuracy and response-time trends with up/down/stable labels
    - recommended next difficulty
    """
    profile = service.profile
    stats = profile.stats
    learning = profile.learning_profile
    overall_accuracy = stats.total_correct / stats.total_questions if stats.total_questions else 0.0

    trends = None
    if learning.trends is not None:
        trends = {
            name: {"value": value, "direction": describe_trend(value)}
            for name, value in (
                ("score", learning.trends.score),
                ("accuracy", learning.trends.accuracy),
                ("response_time", learning.trends.response_time),
            )
        }
        trends["last_updated"] = learning.trends.last_updated.isoformat()

    return {
        "total_games": stats.total_games,
        "total_correct": stats.total_correct,
        "total_questions": stats.total_questions,
        "overall_accuracy": overall_accuracy,
        "total_score": stats.total_score,
        "best_score": stats.best_score,
        "average_accuracy": stats.average_accuracy,
        "average_response_time": stats.average_response_time,
        "strengths": [entry.model_dump() for entry in learning.strengths],
        "weaknesses": [entry.model_dump() for entry in learning.weaknesses],
        "trends": trends,
        "next_difficulty": service.next_difficulty(),
    }


@router.get("/profile/achievements")
async def get_achievements(service: GameService = Depends(get_game_service)):
    """Return every achievement with its progress and completion flag."""
    return {
        "achievements": [achievement.model_dump(mode="json") for achievement in service.profile.achievements]
    }


@router.get("/profile/history")
async def get_history(service: GameService = Depends(get_game_service)):
    """Return the most recent sessions, newest first."""
    history = service.recent_history(RECENT_HISTORY_DISPLAY_LIMIT)
    return {
        "games": [
            {
                "mode": result.mode,
                "score": result.score,
                "accuracy": result.accuracy,
                "average_response_time": result.average_response_time,
                "total_time": result.total_time,
                "coins": result.coins,
                "xp": result.xp,
                "timestamp": result.timestamp.isoformat(),
                "category_mastery": {
                    category: mastery.model_dump() for category, mastery in result.category_mastery.items()
                },
            }
            for result in history
        ]
    }


@router.get("/notifications")
async def get_notifications(service: GameService = Depends(get_game_service)):
    """Return recent notifications, newest first."""
    return {"notifications": service.notifier.recent()}
