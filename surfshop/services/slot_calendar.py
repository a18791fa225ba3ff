"""Discrete weekend lesson slots.

A slot is a plain calendar date plus an hourly ``HH:MM`` mark. Dates are
built from their year/month/day parts only, so ``"2024-06-01"`` is June 1st
whatever timezone the server or the client runs in.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Iterator

from ..core.constants import (
    LESSON_FIRST_HOUR,
    LESSON_LAST_HOUR,
    SLOT_KEY_SEPARATOR,
    WEEKEND_DAYS,
)
from ..core.errors import ValidationError

LESSON_TIMES: tuple[str, ...] = tuple(
    f"{hour:02d}:00" for hour in range(LESSON_FIRST_HOUR, LESSON_LAST_HOUR + 1)
)

_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
_TIME_RE = re.compile(r"(\d{2}):(\d{2})", re.ASCII)

WEEKEND_ONLY_MESSAGE = "Lessons can only be booked on Saturdays or Sundays"
HOURS_MESSAGE = "Lessons can only be booked between 8am and 4pm"


def parse_lesson_date(value: str | date) -> date:
    if isinstance(value, date):
        return value
    match = _DATE_RE.fullmatch(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValidationError("Invalid date format, expected YYYY-MM-DD")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise ValidationError("Invalid date format, expected YYYY-MM-DD") from exc


def is_valid_lesson_date(value: date) -> bool:
    return value.weekday() in WEEKEND_DAYS


def normalize_lesson_time(value: str) -> str:
    """Return the stored ``HH:00`` form of ``value``.

    Only the rebuilt string ever reaches the database, so the slot index
    compares one spelling per hour.
    """
    match = _TIME_RE.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise ValidationError(HOURS_MESSAGE)
    hours, minutes = (int(part) for part in match.groups())
    if not (LESSON_FIRST_HOUR <= hours <= LESSON_LAST_HOUR and minutes == 0):
        raise ValidationError(HOURS_MESSAGE)
    return f"{hours:02d}:00"


def is_valid_lesson_time(value: str) -> bool:
    try:
        normalize_lesson_time(value)
    except ValidationError:
        return False
    return True


def validate_slot(lesson_date: str | date, time: str) -> tuple[date, str]:
    """Normalize a requested slot or raise :class:`ValidationError`."""
    parsed = parse_lesson_date(lesson_date)
    if not is_valid_lesson_date(parsed):
        raise ValidationError(WEEKEND_ONLY_MESSAGE)
    return parsed, normalize_lesson_time(time)


def slot_key(lesson_date: date, time: str) -> str:
    return f"{lesson_date.isoformat()}{SLOT_KEY_SEPARATOR}{time}"


def weekend_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        if is_valid_lesson_date(current):
            yield current
        current += timedelta(days=1)


__all__ = [
    "LESSON_TIMES",
    "parse_lesson_date",
    "is_valid_lesson_date",
    "normalize_lesson_time",
    "is_valid_lesson_time",
    "validate_slot",
    "slot_key",
    "weekend_dates",
]
