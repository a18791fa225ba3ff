from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..core import permissions
from ..core.constants import SLOT_KEY_SEPARATOR
from ..core.errors import NotFound, SlotConflict, ValidationError
from ..db import models
from ..db.models.lesson import ACTIVE_SLOT_INDEX, OCCUPYING_STATUSES, LessonStatus
from . import slot_calendar

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SlotOutcome:
    slot_key: str
    status: str
    lesson: models.Lesson | None = None
    error: str | None = None


def _validate_terms(price: float | None, hours: float | None) -> None:
    if price is not None and (isinstance(price, bool) or price < 0):
        raise ValidationError("Price must be a non-negative number")
    if hours is not None and (isinstance(hours, bool) or hours < 0):
        raise ValidationError("Hours must be a non-negative number")


def _slot_taken(
    db: Session, lesson_date: date, time: str, exclude_id: int | None = None
) -> bool:
    stmt = select(models.Lesson.id).where(
        models.Lesson.date == lesson_date,
        models.Lesson.time == time,
        models.Lesson.status.in_(OCCUPYING_STATUSES),
    )
    if exclude_id is not None:
        stmt = stmt.where(models.Lesson.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None


def _is_slot_violation(exc: IntegrityError) -> bool:
    constraint = getattr(getattr(exc.orig, "diag", None), "constraint_name", None)
    if constraint:
        return constraint == ACTIVE_SLOT_INDEX
    # sqlite reports the indexed columns instead of the index name
    message = str(exc.orig)
    return ACTIVE_SLOT_INDEX in message or "lessons.lesson_date, lessons.time" in message


def _commit_slot(db: Session, lesson: models.Lesson) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _is_slot_violation(exc):
            logger.info(
                "Slot claimed concurrently",
                extra={"slot_key": slot_calendar.slot_key(lesson.date, lesson.time)},
            )
            raise SlotConflict() from exc
        raise


def get_lesson(db: Session, lesson_id: int) -> models.Lesson:
    lesson = db.get(models.Lesson, lesson_id)
    if lesson is None:
        raise NotFound("Lesson not found")
    return lesson


def reserve(
    db: Session,
    owner: models.Account,
    package_id: int,
    lesson_date: str | date,
    time: str,
    price: float,
    hours: float,
) -> models.Lesson:
    if not package_id:
        raise ValidationError("Missing required field: package_id")
    lesson_date, time = slot_calendar.validate_slot(lesson_date, time)
    _validate_terms(price, hours)
    if price is None or hours is None:
        raise ValidationError("Missing required fields: price and hours")

    if _slot_taken(db, lesson_date, time):
        raise SlotConflict()

    lesson = models.Lesson(
        owner_id=owner.id,
        package_id=package_id,
        date=lesson_date,
        time=time,
        price=price,
        hours=hours,
        status=LessonStatus.pending,
    )
    db.add(lesson)
    _commit_slot(db, lesson)
    db.refresh(lesson)
    logger.info(
        "Lesson booked",
        extra={"lesson_id": lesson.id, "owner_id": owner.id, "slot_key": slot_calendar.slot_key(lesson_date, time)},
    )
    return lesson


def _requested_key(requested_date: str | date, time: str) -> str:
    try:
        return slot_calendar.slot_key(
            slot_calendar.parse_lesson_date(requested_date),
            slot_calendar.normalize_lesson_time(time),
        )
    except ValidationError:
        # unparseable input is echoed back as sent
        return f"{requested_date}{SLOT_KEY_SEPARATOR}{time}"


def reserve_batch(
    db: Session,
    owner: models.Account,
    package_id: int,
    slots: Iterable[tuple[str | date, str]],
    price: float,
    hours: float,
) -> list[SlotOutcome]:
    """Book each slot on its own; a failing slot leaves the others booked."""
    outcomes: list[SlotOutcome] = []
    for requested_date, time in slots:
        key = _requested_key(requested_date, time)
        try:
            lesson = reserve(db, owner, package_id, requested_date, time, price, hours)
        except SlotConflict as exc:
            outcomes.append(SlotOutcome(slot_key=key, status="conflict", error=exc.message))
        except ValidationError as exc:
            outcomes.append(SlotOutcome(slot_key=key, status="invalid", error=exc.message))
        else:
            outcomes.append(SlotOutcome(slot_key=key, status="booked", lesson=lesson))
    return outcomes


def cancel(db: Session, lesson: models.Lesson, requester: models.Account) -> models.Lesson:
    permissions.ensure_owner_or_admin(requester, lesson.owner_id, "cancel this lesson")
    if lesson.status == LessonStatus.cancelled:
        return lesson
    previous = lesson.status
    lesson.status = LessonStatus.cancelled
    if requester.id != lesson.owner_id:
        db.add(
            models.AuditLog(
                actor_type=models.ActorType.admin,
                actor_id=requester.id,
                action="lesson_cancelled",
                payload={
                    "lesson_id": lesson.id,
                    "owner_id": lesson.owner_id,
                    "slot_key": slot_calendar.slot_key(lesson.date, lesson.time),
                    "previous_status": previous.value,
                },
            )
        )
    db.commit()
    db.refresh(lesson)
    logger.info("Lesson cancelled", extra={"lesson_id": lesson.id, "actor_id": requester.id})
    return lesson


def reschedule(
    db: Session,
    lesson: models.Lesson,
    requester: models.Account,
    *,
    lesson_date: str | date | None = None,
    time: str | None = None,
    price: float | None = None,
    hours: float | None = None,
    status: str | LessonStatus | None = None,
) -> models.Lesson:
    permissions.ensure_owner(requester, lesson.owner_id, "update this lesson")

    new_date = lesson.date
    new_time = lesson.time
    if lesson_date is not None:
        new_date = slot_calendar.parse_lesson_date(lesson_date)
        if not slot_calendar.is_valid_lesson_date(new_date):
            raise ValidationError(slot_calendar.WEEKEND_ONLY_MESSAGE)
    if time is not None:
        new_time = slot_calendar.normalize_lesson_time(time)
    _validate_terms(price, hours)

    new_status = lesson.status
    if status is not None:
        try:
            new_status = LessonStatus(status)
        except ValueError as exc:
            raise ValidationError("Invalid status") from exc

    slot_changed = (new_date, new_time) != (lesson.date, lesson.time)
    starts_occupying = new_status in OCCUPYING_STATUSES and not lesson.occupies_slot
    if new_status in OCCUPYING_STATUSES and (slot_changed or starts_occupying):
        if _slot_taken(db, new_date, new_time, exclude_id=lesson.id):
            raise SlotConflict()

    lesson.date = new_date
    lesson.time = new_time
    lesson.status = new_status
    if price is not None:
        lesson.price = price
    if hours is not None:
        lesson.hours = hours
    _commit_slot(db, lesson)
    db.refresh(lesson)
    logger.info(
        "Lesson updated",
        extra={"lesson_id": lesson.id, "slot_key": slot_calendar.slot_key(new_date, new_time)},
    )
    return lesson


def delete(db: Session, lesson: models.Lesson, requester: models.Account) -> None:
    permissions.ensure_owner(requester, lesson.owner_id, "delete this lesson")
    lesson_id = lesson.id
    db.delete(lesson)
    db.commit()
    logger.info("Lesson deleted", extra={"lesson_id": lesson_id, "owner_id": requester.id})


def list_for_owner(db: Session, owner_id: int) -> list[models.Lesson]:
    stmt = (
        select(models.Lesson)
        .options(selectinload(models.Lesson.owner))
        .where(models.Lesson.owner_id == owner_id)
        .order_by(models.Lesson.date, models.Lesson.time)
    )
    return list(db.execute(stmt).scalars().all())


def list_all(db: Session) -> list[models.Lesson]:
    stmt = (
        select(models.Lesson)
        .options(selectinload(models.Lesson.owner))
        .order_by(models.Lesson.created_at.desc(), models.Lesson.id.desc())
    )
    return list(db.execute(stmt).scalars().all())
