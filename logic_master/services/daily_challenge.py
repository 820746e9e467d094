"""Daily challenge generation and per-date caching."""
import logging
from datetime import date
from typing import Optional

from pydantic import ValidationError

from logic_master.constants import DAILY_CHALLENGE_KEY_PREFIX
from logic_master.schemas import DailyChallenge, Question
from logic_master.services.profile_store import ProfileStore

logger = logging.getLogger(__name__)


def challenge_key(day: date) -> str:
    return f"{DAILY_CHALLENGE_KEY_PREFIX}{day.isoformat()}"


def generate_daily_challenge(day: date) -> DailyChallenge:
    """Build the challenge for ``day``."""
    return DailyChallenge(
        date=day.isoformat(),
        title="Daily Reasoning Challenge",
        description="Push your logic to the limit!",
        questions=[
            Question(
                category="deduction",
                difficulty=0.7,
                text="All A are B. All B are C. Sam is an A. Which statement must be true?",
                options=["Sam may be a C", "Sam is certainly a C", "Sam may not be a C", "Sam is certainly not a C"],
                correct_index=1,
                explanation="By syllogism all A are C, and Sam is an A, so Sam is a C.",
            ),
            Question(
                category="pattern",
                difficulty=0.6,
                text="Find the rule and the next number: 2, 6, 12, 20, 30, ?",
                options=["42", "40", "38", "36"],
                correct_index=0,
                explanation="The differences grow by 2 each step (4, 6, 8, 10), so 30 + 12 = 42.",
            ),
            Question(
                category="fallacy",
                difficulty=0.8,
                text="Which argument is an appeal to authority?",
                options=[
                    "Einstein was a physicist, so his views on physics deserve consideration",
                    "This treatment must work because a celebrity says it does",
                    "Most medical research shows regular exercise is healthy",
                    "This theory has a lot of scientific evidence, so it is probably right",
                ],
                correct_index=1,
                explanation="A celebrity is not a medical authority, so their endorsement proves nothing.",
            ),
        ],
    )


def get_daily_challenge(store: ProfileStore, day: date) -> DailyChallenge:
    """
    Return the challenge for ``day``, generating and caching it on first use.

    A corrupt cached blob is replaced with a freshly generated challenge.
    """
    key = challenge_key(day)
    cached: Optional[str] = store.load_blob(key)

    if cached is not None:
        try:
            return DailyChallenge.model_validate_json(cached)
        except ValidationError:
            logger.warning(f"Cached daily challenge {key} is malformed, regenerating")

    challenge = generate_daily_challenge(day)
    if not store.save_blob(key, challenge.model_dump_json()):
        logger.warning(f"Daily challenge {key} could not be cached")
    return challenge
