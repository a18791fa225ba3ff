from surfshop.db import models
from surfshop.services.admin import ensure_admin_exists
from surfshop.core import security

from .conftest import create_account


def test_creates_default_admin(db_session):
    ensure_admin_exists(db_session, "Admin@SurfShop.com", "strong_password")

    created = db_session.query(models.Account).filter_by(email="admin@surfshop.com").one()

    assert created.is_admin is True
    assert created.auth_provider == models.AuthProvider.local
    assert security.verify_password("strong_password", created.password_hash)


def test_updates_password_for_existing_admin(db_session):
    ensure_admin_exists(db_session, "admin@surfshop.com", "old_password")

    ensure_admin_exists(db_session, "admin@surfshop.com", "new_password")

    admins = db_session.query(models.Account).filter_by(email="admin@surfshop.com").all()
    assert len(admins) == 1
    assert security.verify_password("new_password", admins[0].password_hash)


def test_promotes_existing_account(db_session):
    create_account(db_session, "owner@surfshop.com", "Owner")

    ensure_admin_exists(db_session, "owner@surfshop.com", "strong_password")

    account = db_session.query(models.Account).filter_by(email="owner@surfshop.com").one()
    assert account.is_admin is True
    assert security.verify_password("strong_password", account.password_hash)


def test_google_only_account_gets_a_password(db_session):
    db_session.add(
        models.Account(
            name="Staff",
            email="staff@surfshop.com",
            google_id="g-staff",
            auth_provider=models.AuthProvider.google,
        )
    )
    db_session.commit()

    admin = ensure_admin_exists(db_session, "staff@surfshop.com", "strong_password")

    assert admin.is_admin is True
    assert admin.google_id == "g-staff"
    assert security.verify_password("strong_password", admin.password_hash)
