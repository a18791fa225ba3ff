import datetime as dt
from pydantic import BaseModel, EmailStr

from .user import Owner


class RepairRequestCreate(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    zip_code: str | None = None
    board_size: str | None = None
    board_type: str | None = None
    ding_location: str | None = None
    ding_size: str | None = None
    description: str | None = None
    delivery_method: str | None = None
    pickup_address: str | None = None
    pickup_date: str | None = None
    pickup_notes: str | None = None
    dropoff_date: str | None = None


class RepairStatusUpdate(BaseModel):
    status: str | None = None


class RepairRequest(BaseModel):
    id: int
    owner_id: int
    name: str
    email: str
    phone: str
    zip_code: str
    board_size: str
    board_type: str
    ding_location: str
    ding_size: str
    description: str | None = None
    delivery_method: str
    pickup_address: str | None = None
    pickup_date: dt.date | None = None
    pickup_notes: str | None = None
    dropoff_date: dt.date | None = None
    status: str
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    class Config:
        from_attributes = True


class AdminRepairRequest(RepairRequest):
    owner: Owner | None = None
