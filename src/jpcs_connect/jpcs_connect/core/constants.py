"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STORE_LATENCY_SECONDS = 0.05
STORAGE_KEY_PREFIX = "jpcs_"
DEFAULT_TOP_EVENTS = 5
DEFAULT_TREND_MONTHS = 6
DEFAULT_DAY_LABEL = "Day 1"
UNKNOWN_EVENT_NAME = "Unknown Event"
