"""Coins, experience and level progression."""
import logging
from typing import Dict, List

from logic_master.constants import XP_PER_LEVEL, LEVEL_UP_COINS_PER_LEVEL
from logic_master.schemas import UserProfile

logger = logging.getLogger(__name__)


def experience_for_next_level(level: int) -> int:
    """Experience needed to leave ``level``."""
    return level * XP_PER_LEVEL


def add_coins(profile: UserProfile, amount: int) -> int:
    """Credit coins and return the new balance."""
    profile.coins += amount
    return profile.coins


def deduct_coins(profile: UserProfile, amount: int) -> bool:
    """
    Debit coins if the balance covers the amount.

    Args:
        profile: Player profile
        amount: Coins to deduct

    Returns:
        True if deducted, False (balance untouched) when funds are insufficient
    """
    if profile.coins < amount:
        logger.debug(f"Coin deduction rejected: balance={profile.coins}, amount={amount}")
        return False

    profile.coins -= amount
    return True


def add_experience(profile: UserProfile, amount: int) -> List[Dict]:
    """
    Credit experience and apply any level-ups it triggers.

    Level-up criteria: experience >= level * 500. Each level-up subtracts the
    threshold, grants level * 100 coins (using the level being left) and is
    checked again, so a large award can climb several levels at once.

    Args:
        profile: Player profile
        amount: Experience to add

    Returns:
        One dictionary per level gained:
        {
            "from_level": 1,
            "to_level": 2,
            "coins_awarded": 100
        }
    """
    profile.experience += amount

    level_ups = []
    while profile.experience >= experience_for_next_level(profile.level):
        from_level = profile.level
        profile.experience -= experience_for_next_level(from_level)
        coins_awarded = from_level * LEVEL_UP_COINS_PER_LEVEL
        profile.coins += coins_awarded
        profile.level = from_level + 1

        level_ups.append({
            "from_level": from_level,
            "to_level": profile.level,
            "coins_awarded": coins_awarded
        })
        logger.info(f"Level up: {from_level} -> {profile.level}", extra={"profile_id": profile.id})

    return level_ups


def get_level_progress(profile: UserProfile) -> Dict:
    """
    Get the player's progress toward the next level.

    Returns:
        Dictionary with level progress:
        {
            "level": 2,
            "experience": 250,
            "required_experience": 1000,
            "progress_percentage": 25.0
        }
    """
    required = experience_for_next_level(profile.level)
    return {
        "level": profile.level,
        "experience": profile.experience,
        "required_experience": required,
        "progress_percentage": round(profile.experience / required * 100, 1)
    }
