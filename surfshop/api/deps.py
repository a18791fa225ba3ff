from typing import Annotated
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from ..core import auth, permissions
from ..core.errors import Unauthenticated
from ..db.session import get_db
from ..db import models


bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[Session, Depends(get_db)],
) -> models.Account:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise Unauthenticated("Not authorized, no token")
    return auth.account_from_token(db, credentials.credentials)


def get_current_admin(
    user: Annotated[models.Account, Depends(get_current_user)],
) -> models.Account:
    return permissions.ensure_admin(user)


CurrentUser = Annotated[models.Account, Depends(get_current_user)]
CurrentAdmin = Annotated[models.Account, Depends(get_current_admin)]
DbSession = Annotated[Session, Depends(get_db)]
