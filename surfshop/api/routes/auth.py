from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse
from ...api import deps
from ...core import auth, security
from ...db import schemas
from ...services import identity_service
from ...services.identity_service import GoogleOAuthClient


router = APIRouter(prefix="/auth", tags=["auth"])

GoogleClient = Annotated[GoogleOAuthClient, Depends(identity_service.get_google_client)]


def _auth_response(account) -> schemas.AuthResponse:
    return schemas.AuthResponse(
        user=schemas.User.model_validate(account),
        token=security.create_session_token(account.id),
    )


@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.RegisterRequest, db: deps.DbSession):
    account = identity_service.register_local(db, payload.name, payload.email, payload.password)
    return _auth_response(account)


@router.post("/login", response_model=schemas.AuthResponse)
def login(payload: schemas.LoginRequest, db: deps.DbSession):
    account = auth.authenticate_account(db, payload.email, payload.password)
    return _auth_response(account)


@router.get("/google")
def google_login(google: GoogleClient):
    return RedirectResponse(google.authorization_url(), status_code=status.HTTP_302_FOUND)


@router.get("/google/callback")
def google_callback(
    db: deps.DbSession,
    google: GoogleClient,
    code: str = Query(...),
    state: str | None = None,
):
    google.verify_state(state)
    profile = google.fetch_profile(code)
    account = identity_service.link_federated_account(db, profile)
    token = security.create_session_token(account.id)
    return RedirectResponse(google.frontend_redirect(token), status_code=status.HTTP_302_FOUND)


@router.get("/me", response_model=schemas.User)
def me(current: deps.CurrentUser):
    return current


@router.put("/me", response_model=schemas.User)
def update_me(payload: schemas.ProfileUpdate, db: deps.DbSession, current: deps.CurrentUser):
    return identity_service.update_profile(
        db, current, name=payload.name, email=payload.email, password=payload.password
    )
