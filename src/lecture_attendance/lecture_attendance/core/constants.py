"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Storage sentinel for an assignment that covers every batch of its branch.
ALL_BATCHES = "ALL"

LOW_ATTENDANCE_THRESHOLD = 75
MAX_LECTURE_SLOTS = 7

EXPORT_DATE_FORMAT = "%Y-%m-%d"
