from fastapi import APIRouter, status
from ...api import deps
from ...db import schemas
from ...services import repair_service

router = APIRouter(prefix="/repairs", tags=["repairs"])


@router.post("", response_model=schemas.RepairRequest, status_code=status.HTTP_201_CREATED)
def create_repair_request(
    payload: schemas.RepairRequestCreate, db: deps.DbSession, user: deps.CurrentUser
):
    return repair_service.create_repair_request(db, user, payload.model_dump())


@router.get("/my", response_model=list[schemas.RepairRequest])
def my_repair_requests(db: deps.DbSession, user: deps.CurrentUser):
    return repair_service.list_for_owner(db, user.id)


@router.get("/all", response_model=list[schemas.AdminRepairRequest])
def all_repair_requests(db: deps.DbSession, _: deps.CurrentAdmin):
    return repair_service.list_all(db)


@router.patch("/{repair_id}/status", response_model=schemas.AdminRepairRequest)
def update_repair_status(
    repair_id: int,
    payload: schemas.RepairStatusUpdate,
    db: deps.DbSession,
    admin: deps.CurrentAdmin,
):
    repair = repair_service.get_repair(db, repair_id)
    repair = repair_service.update_status(db, repair, payload.status, admin)
    return schemas.AdminRepairRequest.model_validate(repair)
