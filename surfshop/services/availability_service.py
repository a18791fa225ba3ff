"""Read-only occupancy queries backing the booking calendar.

Every call reads the current rows; occupancy is never cached between
requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.constants import MAX_CALENDAR_DAYS
from ..core.errors import ValidationError
from ..db import models
from ..db.models.lesson import OCCUPYING_STATUSES
from . import slot_calendar


@dataclass(slots=True)
class CalendarSlot:
    time: str
    slot_key: str
    available: bool
    booked_by: str | None = None


@dataclass(slots=True)
class CalendarDay:
    date: date
    weekday: str
    slots: list[CalendarSlot] = field(default_factory=list)


def _check_range(start_date: str | date, end_date: str | date) -> tuple[date, date]:
    start = slot_calendar.parse_lesson_date(start_date)
    end = slot_calendar.parse_lesson_date(end_date)
    if start > end:
        raise ValidationError("start_date must not be after end_date")
    return start, end


def list_occupied_slots(
    db: Session, start_date: str | date, end_date: str | date
) -> list[models.Lesson]:
    start, end = _check_range(start_date, end_date)
    rows = db.execute(
        select(models.Lesson, models.Account.name)
        .join(models.Account, models.Lesson.owner_id == models.Account.id)
        .where(
            models.Lesson.date >= start,
            models.Lesson.date <= end,
            models.Lesson.status.in_(OCCUPYING_STATUSES),
        )
        .order_by(models.Lesson.date, models.Lesson.time)
    ).all()
    lessons = []
    for lesson, owner_name in rows:
        setattr(lesson, "owner_name", owner_name)
        setattr(lesson, "slot_key", slot_calendar.slot_key(lesson.date, lesson.time))
        lessons.append(lesson)
    return lessons


def weekend_calendar(
    db: Session, start_date: str | date, end_date: str | date
) -> list[CalendarDay]:
    start, end = _check_range(start_date, end_date)
    if (end - start).days + 1 > MAX_CALENDAR_DAYS:
        raise ValidationError(f"Date range cannot exceed {MAX_CALENDAR_DAYS} days")
    booked = {
        lesson.slot_key: lesson.owner_name for lesson in list_occupied_slots(db, start, end)
    }
    days = []
    for day in slot_calendar.weekend_dates(start, end):
        slots = []
        for time in slot_calendar.LESSON_TIMES:
            key = slot_calendar.slot_key(day, time)
            slots.append(
                CalendarSlot(
                    time=time,
                    slot_key=key,
                    available=key not in booked,
                    booked_by=booked.get(key),
                )
            )
        days.append(CalendarDay(date=day, weekday=day.strftime("%A"), slots=slots))
    return days
