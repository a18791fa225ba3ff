from fastapi import APIRouter, Query, Response, status
from ...api import deps
from ...core import permissions
from ...db import schemas
from ...services import availability_service, booking_service, catalog

router = APIRouter(prefix="/lessons", tags=["lessons"])


@router.get("", response_model=list[schemas.OccupiedSlot])
def list_occupied_lessons(
    db: deps.DbSession,
    start_date: str = Query(...),
    end_date: str = Query(...),
):
    return availability_service.list_occupied_slots(db, start_date, end_date)


@router.get("/calendar", response_model=list[schemas.CalendarDay])
def weekend_calendar(
    db: deps.DbSession,
    start_date: str = Query(...),
    end_date: str = Query(...),
):
    return availability_service.weekend_calendar(db, start_date, end_date)


@router.get("/packages", response_model=list[schemas.LessonPackage])
def list_packages():
    return catalog.list_packages()


@router.post("", response_model=schemas.Lesson, status_code=status.HTTP_201_CREATED)
def create_lesson(payload: schemas.LessonCreate, db: deps.DbSession, user: deps.CurrentUser):
    price, hours = catalog.resolve_terms(payload.package_id, payload.price, payload.hours)
    return booking_service.reserve(
        db, user, payload.package_id, payload.date, payload.time, price, hours
    )


@router.post("/batch", response_model=list[schemas.SlotOutcome])
def create_lessons_batch(
    payload: schemas.LessonBatchCreate, db: deps.DbSession, user: deps.CurrentUser
):
    price, hours = catalog.resolve_terms(payload.package_id, payload.price, payload.hours)
    return booking_service.reserve_batch(
        db,
        user,
        payload.package_id,
        [(slot.date, slot.time) for slot in payload.slots],
        price,
        hours,
    )


@router.get("/my", response_model=list[schemas.Lesson])
def my_lessons(db: deps.DbSession, user: deps.CurrentUser):
    return booking_service.list_for_owner(db, user.id)


@router.get("/all", response_model=list[schemas.AdminLesson])
def all_lessons(db: deps.DbSession, _: deps.CurrentAdmin):
    return booking_service.list_all(db)


@router.put("/{lesson_id}", response_model=schemas.Lesson)
def update_lesson(
    lesson_id: int, payload: schemas.LessonUpdate, db: deps.DbSession, user: deps.CurrentUser
):
    lesson = booking_service.get_lesson(db, lesson_id)
    permissions.ensure_owner(user, lesson.owner_id, "update this lesson")
    if payload.price is not None or payload.hours is not None:
        catalog.resolve_terms(lesson.package_id, payload.price, payload.hours)
    return booking_service.reschedule(
        db,
        lesson,
        user,
        lesson_date=payload.date,
        time=payload.time,
        price=payload.price,
        hours=payload.hours,
        status=payload.status,
    )


@router.post("/{lesson_id}/cancel", response_model=schemas.Lesson)
def cancel_lesson(lesson_id: int, db: deps.DbSession, user: deps.CurrentUser):
    lesson = booking_service.get_lesson(db, lesson_id)
    return booking_service.cancel(db, lesson, user)


@router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_lesson(lesson_id: int, db: deps.DbSession, user: deps.CurrentUser):
    lesson = booking_service.get_lesson(db, lesson_id)
    booking_service.delete(db, lesson, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
