"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Colombo"

UNKNOWN_TRAINEE_ID = "UNKNOWN"

CSV_FULL_NAME_FIELD = "Full Name"
CSV_USER_ACTION_FIELD = "User Action"
CSV_PRESENT_KEYWORDS = ("join", "present")
CSV_NAME_SEPARATOR = "_"

EXCEL_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
