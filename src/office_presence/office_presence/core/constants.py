"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
PLANNING_WINDOW_DAYS = 90
NOTE_MAX_LENGTH = 500
DATE_FORMAT = "%Y-%m-%d"
