from fastapi import APIRouter
from ...api import deps
from ...core.errors import NotFound
from ...db import models, schemas

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[schemas.User])
def list_users(db: deps.DbSession, _: deps.CurrentAdmin):
    return db.query(models.Account).order_by(models.Account.id).all()


@router.get("/{user_id}", response_model=schemas.User)
def get_user(user_id: int, db: deps.DbSession, _: deps.CurrentAdmin):
    user = db.get(models.Account, user_id)
    if not user:
        raise NotFound("User not found")
    return user
