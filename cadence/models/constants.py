"""Constants for cadence.

This module centralizes all magic numbers and default values used throughout the engine.
"""

# Default analysis period for analytics, history and streaks (days, today included)
DEFAULT_ANALYTICS_DAYS = 30

# Adherence tiers (minimum percentage for each tier)
TIER_EXCELLENT_MIN = 90
TIER_GOOD_MIN = 70
TIER_FAIR_MIN = 50

# Activity levels (entries per day)
ACTIVITY_HIGH_MIN = 3
ACTIVITY_MEDIUM = 2
ACTIVITY_LOW = 1

# Upcoming instances look-ahead
UPCOMING_WINDOW_HOURS = 24

# Initial look-back when following a current streak (doubled until the run breaks)
STREAK_HISTORY_DAYS = 60

# Weekly trend buckets
DEFAULT_WEEKS_BACK = 12

# Calendar month grid (6 rows of 7 days)
MONTH_GRID_DAYS = 42

# Board games
DRAW = "Draw"
TOP_LIST_LIMIT = 5

# Time-of-day format for instance times
TIME_FORMAT = "%H:%M"
