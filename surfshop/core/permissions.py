"""Role and ownership checks applied before mutating or sensitive reads.

Three capabilities exist: anonymous callers, authenticated owners and
admins. A missing identity is :class:`Unauthenticated`; a known identity
lacking the role or the ownership is :class:`Unauthorized`.
"""

from __future__ import annotations

from enum import Enum as PyEnum

from ..db import models
from .errors import Unauthenticated, Unauthorized


class Capability(str, PyEnum):
    anonymous = "anonymous"
    owner = "owner"
    admin = "admin"


def capability_of(account: models.Account | None) -> Capability:
    if account is None:
        return Capability.anonymous
    if account.is_admin:
        return Capability.admin
    return Capability.owner


def ensure_authenticated(account: models.Account | None) -> models.Account:
    if account is None:
        raise Unauthenticated("Not authorized, please authenticate")
    return account


def ensure_admin(account: models.Account | None) -> models.Account:
    account = ensure_authenticated(account)
    if capability_of(account) is not Capability.admin:
        raise Unauthorized("Not authorized, admin access required")
    return account


def ensure_owner(account: models.Account | None, owner_id: int, action: str) -> models.Account:
    account = ensure_authenticated(account)
    if account.id != owner_id:
        raise Unauthorized(f"Not authorized to {action}")
    return account


def ensure_owner_or_admin(
    account: models.Account | None, owner_id: int, action: str
) -> models.Account:
    account = ensure_authenticated(account)
    if account.id != owner_id and capability_of(account) is not Capability.admin:
        raise Unauthorized(f"Not authorized to {action}")
    return account


__all__ = [
    "Capability",
    "capability_of",
    "ensure_authenticated",
    "ensure_admin",
    "ensure_owner",
    "ensure_owner_or_admin",
]
