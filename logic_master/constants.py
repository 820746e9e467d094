"""Game-wide constants and tuning values.

This module centralizes the magic numbers used by scoring, statistics,
achievements and progression so they can be adjusted in one place.
"""

# Session Configuration
DEFAULT_QUESTION_COUNT = 10
"""Number of questions in a standard session."""

MAX_QUESTION_COUNT = 50
"""Upper bound accepted for a single session."""

QUESTION_TIME_LIMIT_SECONDS = 30
"""Countdown per question in timed modes; expiry skips the question."""

ANSWER_DISPLAY_DELAY_SECONDS = 2.0
"""Pause after an answer before the next question (or the results) is shown."""

GAME_MODES = ("single", "multi", "story", "team", "daily")
"""Known session mode tags."""

TIMED_MODES = ("single", "daily")
"""Modes that run the per-question countdown."""

SKIPPED_ANSWER_INDEX = -1
"""Selected-option sentinel recorded for skipped or timed-out questions."""

# Scoring
BASE_SCORE_MULTIPLIER = 100
"""Base points for a correct answer, scaled by question difficulty."""

TIME_BONUS_WINDOW_SECONDS = 30
"""Seconds remaining under this window earn a time bonus."""

TIME_BONUS_PER_SECOND = 2
"""Bonus points per second answered under the window."""

STREAK_BONUS_PER_ANSWER = 10
"""Bonus points per consecutive correct answer."""

MAX_STREAK_BONUS = 50
"""Cap on the streak bonus for a single answer."""

# Session Rewards
COINS_SCORE_DIVISOR = 10
"""Coins earned per this many points."""

XP_SCORE_DIVISOR = 5
"""Experience earned per this many points."""

XP_TIME_BONUS_WINDOW_SECONDS = 300
"""Sessions finished under this many seconds earn bonus experience."""

XP_TIME_BONUS_RATE = 0.1
"""Bonus experience per second saved under the window."""

# Difficulty Estimation
BASE_DIFFICULTY = 0.5
MIN_DIFFICULTY = 0.1
MAX_DIFFICULTY = 1.0
TIME_FACTOR_MAX = 0.2
RESPONSE_TIME_CEILING_SECONDS = 10
ACCURACY_FACTOR_MAX = 0.3
HISTORY_FACTOR_MAX = 0.2
DOMAIN_FACTOR_MAX = 0.1

NEUTRAL_RESPONSE_TIME = 5.0
"""Assumed average response time before any game has been played."""

NEUTRAL_ACCURACY = 0.7
"""Assumed accuracy before any game has been played."""

NEUTRAL_HISTORY_PERFORMANCE = 60.0
"""Assumed history performance (0-100) before any game has been played."""

NEUTRAL_DOMAIN_STRENGTH = 70.0
"""Assumed current domain strength (0-100) before any game has been played."""

# Rolling Statistics
HISTORY_LIMIT = 50
"""Maximum number of session summaries kept in the performance log."""

TREND_WINDOW = 5
"""Number of most recent sessions used for trend calculation."""

RECENT_HISTORY_DISPLAY_LIMIT = 10
"""Number of recent sessions returned by the history endpoint."""

# Mastery
STRENGTH_THRESHOLD = 0.85
"""Minimum category accuracy counted as a strength."""

WEAKNESS_THRESHOLD = 0.70
"""Category accuracy below this is counted as a weakness."""

PROFILE_LIST_LIMIT = 5
"""Maximum entries kept in the strengths and weaknesses lists."""

# Recommendations
RECOMMENDED_WEAKNESSES = 2
RECOMMENDED_GOALS = 2

# Progression
STARTING_COINS = 1000
"""Coin balance of a freshly created profile."""

XP_PER_LEVEL = 500
"""Experience needed to leave level N is N * XP_PER_LEVEL."""

LEVEL_UP_COINS_PER_LEVEL = 100
"""Coins granted on leaving level N is N * LEVEL_UP_COINS_PER_LEVEL."""

HINT_COST = 50
"""Coins deducted for a hint."""

DEFAULT_HINT = "Look for the key facts in the question and rule out the clearly unreasonable options."
"""Hint shown when a question carries no hint of its own."""

# Storage
DAILY_CHALLENGE_KEY_PREFIX = "daily_challenge_"
"""Daily challenge blobs are stored under this prefix plus the ISO date."""

# Notifications
NOTIFICATION_FEED_LIMIT = 20
"""Number of recent notifications kept for the HTTP feed."""

# Rate Limiting
DEFAULT_RATE_LIMIT = "100/minute"
"""Default request budget per client address."""

GAME_START_RATE_LIMIT = "10/minute"
"""Maximum number of session starts allowed per minute."""

ANSWER_SUBMISSION_RATE_LIMIT = "60/minute"
"""Maximum number of answer submissions allowed per minute."""
