"""Database URL resolution and session helpers for the roster store."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from .models import Base


DEFAULT_DB_URL = "sqlite:///roster.db"


def resolve_db_url(db_url: str | None = None) -> str:
    """
    Pick the database URL for a command.

    A bare file path is treated as a SQLite file; None gives the default store.
    """
    if not db_url:
        return DEFAULT_DB_URL
    if "://" not in db_url:
        return f"sqlite:///{Path(db_url)}"
    return db_url


def create_db_engine(db_url: str | None = None, echo: bool = False) -> Engine:
    url = make_url(resolve_db_url(db_url))
    # SQLite will not create missing parent directories itself
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, echo=echo)


def init_database(db_url: str | None = None) -> str:
    """Create the roster tables if missing. Returns the resolved URL."""
    url = resolve_db_url(db_url)
    Base.metadata.create_all(create_db_engine(url))
    print(f"[INFO] Roster tables ready: {url}")
    return url


def get_session(db_url: str | None = None) -> Session:
    """Open a session on the roster store (default: sqlite:///roster.db)."""
    return sessionmaker(bind=create_db_engine(db_url))()
