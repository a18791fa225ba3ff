from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..core import permissions
from ..core.emails import normalize_email
from ..core.errors import NotFound, ValidationError
from ..db import models
from ..db.models.repair_request import DeliveryMethod, RepairStatus
from . import slot_calendar

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "name",
    "email",
    "phone",
    "zip_code",
    "board_size",
    "ding_location",
    "ding_size",
    "delivery_method",
)

def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_date(payload: Mapping[str, Any], field: str) -> date | None:
    value = payload.get(field)
    if value in (None, ""):
        return None
    try:
        return slot_calendar.parse_lesson_date(value)
    except ValidationError as exc:
        raise ValidationError(f"Invalid {field}, expected YYYY-MM-DD") from exc


def create_repair_request(
    db: Session, owner: models.Account, payload: Mapping[str, Any]
) -> models.RepairRequest:
    values = {field: _clean(payload.get(field)) for field in REQUIRED_FIELDS}
    for field in REQUIRED_FIELDS:
        if not values[field]:
            raise ValidationError(f"Missing required field: {field}")

    try:
        delivery_method = DeliveryMethod(values["delivery_method"])
    except ValueError as exc:
        raise ValidationError("delivery_method must be either 'dropoff' or 'pickup'") from exc

    email = normalize_email(values["email"])

    pickup_address = _clean(payload.get("pickup_address"))
    if delivery_method == DeliveryMethod.pickup and not pickup_address:
        raise ValidationError("pickup_address is required when delivery_method is pickup")

    repair = models.RepairRequest(
        owner_id=owner.id,
        name=values["name"],
        email=email,
        phone=values["phone"],
        zip_code=values["zip_code"],
        board_size=values["board_size"],
        board_type=_clean(payload.get("board_type")) or "other",
        ding_location=values["ding_location"],
        ding_size=values["ding_size"],
        description=_clean(payload.get("description")),
        delivery_method=delivery_method,
        pickup_address=pickup_address,
        pickup_date=_optional_date(payload, "pickup_date"),
        pickup_notes=_clean(payload.get("pickup_notes")),
        dropoff_date=_optional_date(payload, "dropoff_date"),
        status=RepairStatus.submitted,
    )
    db.add(repair)
    db.commit()
    db.refresh(repair)
    logger.info("Repair request submitted", extra={"repair_id": repair.id, "owner_id": owner.id})
    return repair


def get_repair(db: Session, repair_id: int) -> models.RepairRequest:
    repair = db.get(models.RepairRequest, repair_id)
    if repair is None:
        raise NotFound("Repair request not found")
    return repair


def list_for_owner(db: Session, owner_id: int) -> list[models.RepairRequest]:
    stmt = (
        select(models.RepairRequest)
        .where(models.RepairRequest.owner_id == owner_id)
        .order_by(models.RepairRequest.created_at.desc(), models.RepairRequest.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def list_all(db: Session) -> list[models.RepairRequest]:
    stmt = (
        select(models.RepairRequest)
        .options(selectinload(models.RepairRequest.owner))
        .order_by(models.RepairRequest.created_at.desc(), models.RepairRequest.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def update_status(
    db: Session,
    repair: models.RepairRequest,
    status: str | None,
    actor: models.Account,
) -> models.RepairRequest:
    # Any recognized status is accepted from any other one; there is no
    # workflow ordering beyond enum membership.
    permissions.ensure_admin(actor)
    if not status:
        raise ValidationError("Status is required")
    try:
        new_status = RepairStatus(status)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in RepairStatus)
        raise ValidationError(f"Invalid status. Must be one of: {allowed}") from exc

    previous = repair.status
    repair.status = new_status
    db.add(
        models.AuditLog(
            actor_type=models.ActorType.admin,
            actor_id=actor.id,
            action="repair_status_changed",
            payload={
                "repair_id": repair.id,
                "from": previous.value if previous else None,
                "to": new_status.value,
            },
        )
    )
    db.commit()
    db.refresh(repair)
    logger.info(
        "Repair status changed",
        extra={"repair_id": repair.id, "status": new_status.value, "actor_id": actor.id},
    )
    return repair
