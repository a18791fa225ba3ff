import datetime as dt
from enum import Enum as PyEnum
from sqlalchemy import Date, DateTime, Enum, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class RepairStatus(str, PyEnum):
    submitted = "submitted"
    in_progress = "in_progress"
    completed = "completed"
    delivered = "delivered"
    cancelled = "cancelled"


class DeliveryMethod(str, PyEnum):
    dropoff = "dropoff"
    pickup = "pickup"


class RepairRequest(Base):
    __tablename__ = "repair_requests"
    __table_args__ = (Index("ix_repair_requests_owner_created", "owner_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(16), nullable=False)
    board_size: Mapped[str] = mapped_column(String(64), nullable=False)
    board_type: Mapped[str] = mapped_column(String(64), default="other")
    ding_location: Mapped[str] = mapped_column(String(255), nullable=False)
    ding_size: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    delivery_method: Mapped[DeliveryMethod] = mapped_column(Enum(DeliveryMethod), nullable=False)
    pickup_address: Mapped[str | None] = mapped_column(String(512))
    pickup_date: Mapped[dt.date | None] = mapped_column(Date)
    pickup_notes: Mapped[str | None] = mapped_column(Text)
    dropoff_date: Mapped[dt.date | None] = mapped_column(Date)
    status: Mapped[RepairStatus] = mapped_column(Enum(RepairStatus), default=RepairStatus.submitted)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    owner = relationship("Account")
