import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core import security
from ..db import models

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_NAME = "Surf Shop Admin"


def ensure_admin_exists(session: Session, email: str, password: str) -> models.Account:
    """Make sure the configured staff account can sign in with ``password``.

    Runs on every startup: a missing account is created, an existing one
    (including a customer or a Google-only account with the same e-mail) is
    promoted and its password reset when it no longer matches.
    """
    email = email.strip().lower()
    account = session.execute(
        select(models.Account).where(models.Account.email == email)
    ).scalar_one_or_none()

    if account is None:
        account = models.Account(
            name=DEFAULT_ADMIN_NAME,
            email=email,
            password_hash=security.get_password_hash(password),
            auth_provider=models.AuthProvider.local,
            is_admin=True,
        )
        session.add(account)
        session.commit()
        logger.info("Default admin created", extra={"account_id": account.id})
        return account

    changes = []
    if account.password_hash is None or not security.verify_password(password, account.password_hash):
        account.password_hash = security.get_password_hash(password)
        changes.append("password")
    if not account.is_admin:
        account.is_admin = True
        changes.append("role")
    if changes:
        session.commit()
        logger.info("Default admin updated", extra={"account_id": account.id, "changes": changes})
    return account
