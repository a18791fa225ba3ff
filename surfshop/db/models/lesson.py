import datetime as dt
from enum import Enum as PyEnum
from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class LessonStatus(str, PyEnum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


# Statuses that hold a slot. The allocation check, the availability query
# and the unique index below all read this tuple.
OCCUPYING_STATUSES = (LessonStatus.pending, LessonStatus.confirmed)

ACTIVE_SLOT_INDEX = "uq_lessons_active_slot"

_active_slot_predicate = text(
    "status IN ({})".format(", ".join(f"'{status.value}'" for status in OCCUPYING_STATUSES))
)


class Lesson(Base):
    __tablename__ = "lessons"
    __table_args__ = (
        Index(
            ACTIVE_SLOT_INDEX,
            "lesson_date",
            "time",
            unique=True,
            postgresql_where=_active_slot_predicate,
            sqlite_where=_active_slot_predicate,
        ),
        CheckConstraint("price >= 0", name="ck_lessons_price_non_negative"),
        CheckConstraint("hours >= 0", name="ck_lessons_hours_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    package_id: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[dt.date] = mapped_column("lesson_date", Date, nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    hours: Mapped[float] = mapped_column(Numeric(4, 2), nullable=False)
    status: Mapped[LessonStatus] = mapped_column(Enum(LessonStatus), default=LessonStatus.pending)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    owner = relationship("Account")

    @property
    def occupies_slot(self) -> bool:
        return self.status in OCCUPYING_STATUSES
