"""Local and Google sign-in on top of the account table.

Google is driven through the OAuth2 authorization-code flow with ``httpx``;
the provider itself is an external collaborator and every transport or
protocol failure is reported as :class:`UpstreamUnavailable`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import logging
from urllib.parse import urlencode

import httpx
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..core import security
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.emails import normalize_email
from ..core.errors import AccountExists, Unauthenticated, UpstreamUnavailable, ValidationError
from ..db import models
from ..db.models.user import AuthProvider

logger = logging.getLogger(__name__)

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
OAUTH_STATE_PURPOSE = "google_oauth_state"
OAUTH_STATE_TTL = timedelta(minutes=10)

@dataclass(slots=True)
class FederatedProfile:
    provider_id: str
    email: str
    name: str | None
    email_verified: bool


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def register_local(db: Session, name: str | None, email: str | None, password: str | None) -> models.Account:
    missing = [
        field
        for field, value in (("name", name), ("email", email), ("password", password))
        if not value
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    email = normalize_email(email)
    if db.query(models.Account).filter_by(email=email).first():
        raise AccountExists()
    account = models.Account(
        name=name.strip(),
        email=email,
        password_hash=security.get_password_hash(password),
        auth_provider=AuthProvider.local,
        last_login_at=_utc_now(),
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    logger.info("Account registered", extra={"account_id": account.id})
    return account


def update_profile(
    db: Session,
    account: models.Account,
    *,
    name: str | None = None,
    email: str | None = None,
    password: str | None = None,
) -> models.Account:
    if name:
        account.name = name.strip()
    if email:
        email = normalize_email(email)
        existing = db.query(models.Account).filter_by(email=email).first()
        if existing and existing.id != account.id:
            raise AccountExists("Email is already in use")
        account.email = email
    if password:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        account.password_hash = security.get_password_hash(password)
    db.commit()
    db.refresh(account)
    return account


def link_federated_account(db: Session, profile: FederatedProfile) -> models.Account:
    """Find or create the account for a Google identity.

    An existing local account is linked when the provider reports the same
    verified e-mail; the password stays usable alongside Google sign-in.
    """
    now = _utc_now()
    account = db.query(models.Account).filter_by(google_id=profile.provider_id).first()
    if account:
        account.last_login_at = now
        db.commit()
        return account

    email = normalize_email(profile.email)
    account = db.query(models.Account).filter_by(email=email).first()
    if account:
        if not profile.email_verified:
            raise Unauthenticated("Google account e-mail is not verified")
        account.google_id = profile.provider_id
        account.auth_provider = AuthProvider.local if account.password_hash else AuthProvider.google
        account.last_login_at = now
        db.commit()
        logger.info("Linked Google identity", extra={"account_id": account.id})
        return account

    account = models.Account(
        name=(profile.name or "").strip() or email.split("@")[0],
        email=email,
        google_id=profile.provider_id,
        auth_provider=AuthProvider.google,
        last_login_at=now,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    logger.info("Account created from Google sign-in", extra={"account_id": account.id})
    return account


class GoogleOAuthClient:
    def __init__(self, settings: Settings | None = None, transport: httpx.BaseTransport | None = None):
        self.settings = settings or get_settings()
        self._transport = transport

    def _ensure_configured(self) -> None:
        if not self.settings.google_oauth_enabled:
            raise UpstreamUnavailable("Google OAuth is not configured")

    def authorization_url(self) -> str:
        self._ensure_configured()
        state = security.create_access_token({"purpose": OAUTH_STATE_PURPOSE}, OAUTH_STATE_TTL)
        query = urlencode(
            {
                "client_id": self.settings.google_client_id,
                "redirect_uri": self.settings.google_callback_url,
                "response_type": "code",
                "scope": "openid email profile",
                "state": state,
                "prompt": "select_account",
            }
        )
        return f"{GOOGLE_AUTHORIZE_URL}?{query}"

    @staticmethod
    def verify_state(state: str | None) -> None:
        if not state:
            raise Unauthenticated("Google authentication failed")
        payload = security.decode_token(state)
        if payload.get("purpose") != OAUTH_STATE_PURPOSE:
            raise Unauthenticated("Google authentication failed")

    def fetch_profile(self, code: str) -> FederatedProfile:
        self._ensure_configured()
        try:
            with httpx.Client(timeout=10, transport=self._transport) as client:
                token_response = client.post(
                    GOOGLE_TOKEN_URL,
                    data={
                        "code": code,
                        "client_id": self.settings.google_client_id,
                        "client_secret": self.settings.google_client_secret,
                        "redirect_uri": self.settings.google_callback_url,
                        "grant_type": "authorization_code",
                    },
                )
                if token_response.status_code in (400, 401):
                    raise Unauthenticated("Google authentication failed")
                token_response.raise_for_status()
                access_token = token_response.json().get("access_token")
                if not access_token:
                    raise Unauthenticated("Google authentication failed")
                userinfo_response = client.get(
                    GOOGLE_USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                userinfo_response.raise_for_status()
                userinfo = userinfo_response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.exception("Google OAuth exchange failed")
            raise UpstreamUnavailable("Google sign-in is temporarily unavailable") from exc

        if not userinfo.get("sub") or not userinfo.get("email"):
            raise Unauthenticated("Google authentication failed")
        return FederatedProfile(
            provider_id=str(userinfo["sub"]),
            email=userinfo["email"],
            name=userinfo.get("name"),
            email_verified=bool(userinfo.get("email_verified", False)),
        )

    def frontend_redirect(self, token: str) -> str:
        frontend_url = self.settings.frontend_url
        if not frontend_url.startswith(("http://", "https://")):
            frontend_url = f"http://{frontend_url}"
        frontend_url = frontend_url.rstrip("/")
        return f"{frontend_url}/auth/callback?{urlencode({'token': token})}"


def get_google_client() -> GoogleOAuthClient:
    return GoogleOAuthClient()
