"""Database utilities for the reference-data snapshot store."""

from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from .config import get_settings


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Return a lazily created engine instance."""

    settings = get_settings()
    return create_engine(settings.database_url, connect_args={"check_same_thread": False})


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = Session(get_engine())
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_database() -> None:
    """Ensure that the database schema exists."""

    from . import models  # noqa: F401 - ensure models are imported

    SQLModel.metadata.create_all(bind=get_engine())
