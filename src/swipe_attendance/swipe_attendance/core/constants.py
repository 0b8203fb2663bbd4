"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_BURST_THRESHOLD_MINUTES = 2
DEFAULT_STATUS_FILTER = ("Success",)
DEFAULT_OVERNIGHT_SHIFT_CODE = "C"

TOTAL_TIMESTAMPS = 4
PARTIAL_QUALITY_THRESHOLD = 75
MAX_RISK_SCORE = 10
MAX_SEVERITY_TOTAL = 6

# Spreadsheet rows are 1-based and the first row is the header.
ROW_NUMBER_OFFSET = 2
MAX_REPORTED_WARNINGS = 10
PROGRESS_LOG_BATCH = 100

STATUS_ON_TIME = "On Time"
STATUS_INVALID_NO_CHECK_IN = "INVALID - No Check-In"
MISSING_BRACKET_OPENER = "[Missing:"

LABEL_LATE_CHECK_IN = "Late Check-in"
LABEL_EARLY_BREAK_OUT = "Leave Soon Break Out"
LABEL_LATE_BREAK_IN = "Late Break In"
LABEL_EARLY_CHECK_OUT = "Leave Soon Check Out"
