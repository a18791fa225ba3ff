from datetime import datetime, timezone

from sqlalchemy.orm import Session

from ..db import models
from . import security
from .errors import Unauthenticated


def authenticate_account(db: Session, email: str, password: str) -> models.Account:
    account = db.query(models.Account).filter_by(email=email.strip().lower()).first()
    if not account:
        raise Unauthenticated("Invalid credentials")
    if not account.password_hash:
        raise Unauthenticated("This account uses Google sign-in. Please sign in with Google.")
    if not security.verify_password(password, account.password_hash):
        raise Unauthenticated("Invalid credentials")
    account.last_login_at = datetime.now(timezone.utc)
    db.commit()
    return account


def account_from_token(db: Session, token: str) -> models.Account:
    payload = security.decode_token(token)
    account_id = payload.get("sub")
    if account_id is None:
        raise Unauthenticated("Not authorized, token failed")
    try:
        account = db.get(models.Account, int(account_id))
    except (TypeError, ValueError) as exc:
        raise Unauthenticated("Not authorized, token failed") from exc
    if account is None:
        raise Unauthenticated("User not found")
    return account
