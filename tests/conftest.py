import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from surfshop.api.errors import install_error_handlers
from surfshop.api.routes import auth, lessons, misc, repairs, users
from surfshop.core import security
from surfshop.db.session import Base, get_db
from surfshop.db import models


def create_account(session, email="rider@example.com", name="Rider", is_admin=False):
    account = models.Account(name=name, email=email, is_admin=is_admin)
    session.add(account)
    session.commit()
    session.refresh(account)
    return account


def auth_headers(account):
    return {"Authorization": f"Bearer {security.create_session_token(account.id)}"}


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def api_client():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    test_app = FastAPI()
    install_error_handlers(test_app)
    for module in (auth, lessons, repairs, users, misc):
        test_app.include_router(module.router, prefix="/api/v1")
    test_app.dependency_overrides[get_db] = override_get_db

    with TestClient(test_app) as client:
        yield client, TestingSessionLocal

    test_app.dependency_overrides.clear()
