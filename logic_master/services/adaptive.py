"""Category selection for the next session."""
from typing import List

from logic_master.constants import RECOMMENDED_WEAKNESSES, RECOMMENDED_GOALS
from logic_master.schemas import LearningProfile
from logic_master.services.quiz_generator import Category


def is_known_category(category: str) -> bool:
    return category in {member.value for member in Category}


def recommend_categories(profile: LearningProfile) -> List[str]:
    """
    Recommend categories for the next session, most important first.

    Strategy:
    - Up to RECOMMENDED_WEAKNESSES weakness categories (practice first)
    - Up to RECOMMENDED_GOALS learning-goal categories
    - The top strength (keeps motivation up)
    - The top preference (keeps engagement up)

    Duplicates and unknown categories are dropped. A profile with nothing to
    go on gets every category, so new players see the whole range.

    Args:
        profile: The player's learning profile

    Returns:
        Ordered list of category tags, never empty
    """
    recommended = []
    recommended.extend(entry.category for entry in profile.weaknesses[:RECOMMENDED_WEAKNESSES])
    recommended.extend(profile.learning_goals[:RECOMMENDED_GOALS])
    if profile.strengths:
        recommended.append(profile.strengths[0].category)
    if profile.preferences:
        recommended.append(profile.preferences[0])

    unique = []
    for category in recommended:
        if is_known_category(category) and category not in unique:
            unique.append(category)

    return unique or [member.value for member in Category]
