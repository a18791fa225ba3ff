import datetime as dt
from pydantic import BaseModel, Field

from .user import Owner


class LessonCreate(BaseModel):
    package_id: int
    date: str
    time: str
    price: float | None = None
    hours: float | None = None


class RequestedSlot(BaseModel):
    date: str
    time: str


class LessonBatchCreate(BaseModel):
    package_id: int
    slots: list[RequestedSlot] = Field(min_length=1)
    price: float | None = None
    hours: float | None = None


class LessonUpdate(BaseModel):
    date: str | None = None
    time: str | None = None
    price: float | None = None
    hours: float | None = None
    status: str | None = None


class LessonBase(BaseModel):
    id: int
    package_id: int
    date: dt.date
    time: str
    status: str

    class Config:
        from_attributes = True


class Lesson(LessonBase):
    owner_id: int
    price: float
    hours: float
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class AdminLesson(Lesson):
    owner: Owner | None = None


class OccupiedSlot(LessonBase):
    slot_key: str
    owner_name: str | None = None


class SlotOutcome(BaseModel):
    slot_key: str
    status: str
    lesson: Lesson | None = None
    error: str | None = None

    class Config:
        from_attributes = True


class CalendarSlot(BaseModel):
    time: str
    slot_key: str
    available: bool
    booked_by: str | None = None

    class Config:
        from_attributes = True


class CalendarDay(BaseModel):
    date: dt.date
    weekday: str
    slots: list[CalendarSlot]

    class Config:
        from_attributes = True


class LessonPackage(BaseModel):
    id: int
    title: str
    level: str
    duration: str
    description: str
    price: float
    hours: float
    goals: list[str]
    highlights: list[str]

    class Config:
        from_attributes = True
