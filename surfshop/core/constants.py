"""Common application-wide constants."""

# Lessons run hourly; the last one starts at 15:00 and ends at 16:00
LESSON_FIRST_HOUR = 8
LESSON_LAST_HOUR = 15

# ``date.weekday()`` values for Saturday and Sunday
WEEKEND_DAYS = frozenset({5, 6})

SLOT_KEY_SEPARATOR = "_"

# Widest window the weekend calendar endpoint will render
MAX_CALENDAR_DAYS = 93

MIN_PASSWORD_LENGTH = 6


__all__ = [
    "LESSON_FIRST_HOUR",
    "LESSON_LAST_HOUR",
    "WEEKEND_DAYS",
    "SLOT_KEY_SEPARATOR",
    "MAX_CALENDAR_DAYS",
    "MIN_PASSWORD_LENGTH",
]
