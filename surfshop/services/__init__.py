from . import (
    availability_service,
    booking_service,
    catalog,
    identity_service,
    repair_service,
    slot_calendar,
)
__all__ = [
    "availability_service",
    "booking_service",
    "catalog",
    "identity_service",
    "repair_service",
    "slot_calendar",
]
