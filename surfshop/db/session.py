from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from ..config import get_settings

settings = get_settings()


def build_engine(url: str) -> Engine:
    if make_url(url).get_backend_name() == "sqlite":
        # local runs without Postgres; FastAPI serves sync routes from a threadpool
        return create_engine(url, future=True, connect_args={"check_same_thread": False})
    return create_engine(url, future=True, echo=False, pool_pre_ping=True)


engine = build_engine(settings.sqlalchemy_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
Base = declarative_base()


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
