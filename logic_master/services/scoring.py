"""Per-answer points and per-session rewards."""
import math
from typing import Iterable, NamedTuple

from logic_master.constants import (
    BASE_SCORE_MULTIPLIER,
    TIME_BONUS_WINDOW_SECONDS,
    TIME_BONUS_PER_SECOND,
    STREAK_BONUS_PER_ANSWER,
    MAX_STREAK_BONUS,
    COINS_SCORE_DIVISOR,
    XP_SCORE_DIVISOR,
    XP_TIME_BONUS_WINDOW_SECONDS,
    XP_TIME_BONUS_RATE,
)
from logic_master.schemas import AnswerRecord


class AnswerScore(NamedTuple):
    base: int
    time_bonus: int
    streak_bonus: int

    @property
    def total(self) -> int:
        return self.base + self.time_bonus + self.streak_bonus


class SessionRewards(NamedTuple):
    coins: int
    xp: int


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def score_correct_answer(difficulty: float, response_time: float, streak: int) -> AnswerScore:
    """
    Points for a correct answer.

    Formula:
    - base = round(100 * difficulty)
    - time_bonus = max(0, round(30 - response_time) * 2)
    - streak_bonus = min(streak * 10, 50), where streak already counts this answer

    Args:
        difficulty: Question difficulty (0-1)
        response_time: Seconds taken to answer
        streak: Consecutive correct answers including this one

    Returns:
        AnswerScore with the three components
    """
    base = round_half_up(BASE_SCORE_MULTIPLIER * difficulty)
    time_bonus = max(0, round_half_up(TIME_BONUS_WINDOW_SECONDS - response_time) * TIME_BONUS_PER_SECOND)
    streak_bonus = min(streak * STREAK_BONUS_PER_ANSWER, MAX_STREAK_BONUS)
    return AnswerScore(base=base, time_bonus=time_bonus, streak_bonus=streak_bonus)


def calculate_session_rewards(score: int, accuracy: float, total_time: float) -> SessionRewards:
    """
    Coins and experience for a finished session.

    - coins = round(score / 10) + round(accuracy * 100)
    - xp = round(score / 5 + max(0, round(300 - total_time) * 0.1))
    """
    coins = round_half_up(score / COINS_SCORE_DIVISOR) + round_half_up(accuracy * 100)
    time_bonus = max(0, round_half_up(XP_TIME_BONUS_WINDOW_SECONDS - total_time) * XP_TIME_BONUS_RATE)
    xp = round_half_up(score / XP_SCORE_DIVISOR + time_bonus)
    return SessionRewards(coins=coins, xp=xp)


def longest_streak(answers: Iterable[AnswerRecord]) -> int:
    """Longest run of consecutive correct answers; skips and misses break the run."""
    current = 0
    best = 0
    for answer in answers:
        if answer.is_correct:
            current += 1
            best = max(best, current)
        else:
            current = 0
    return best


def is_timed(answer: AnswerRecord) -> bool:
    """Skipped and timed-out answers carry a response time of 0."""
    return answer.response_time > 0


def average_response_time(answers: Iterable[AnswerRecord]) -> float:
    """Mean response time over timed answers; 0 when there are none."""
    times = [answer.response_time for answer in answers if is_timed(answer)]
    return sum(times) / len(times) if times else 0.0
