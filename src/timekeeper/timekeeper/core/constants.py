"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MONTHLY_LEAVE_QUOTA = 3

# Week definition used for the monthly breakdown (0=Monday ... 6=Sunday).
DEFAULT_WEEK_FIRST_DAY = 6
DEFAULT_WEEK_MIN_DAYS = 1

DURATION_FORMAT = "{hours} hours, {minutes} minutes, {seconds} seconds"
DURATION_NOT_AVAILABLE = "N/A"
