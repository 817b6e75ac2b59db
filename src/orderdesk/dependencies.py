"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import Generator

from sqlmodel import Session

from .config import get_settings
from .database import session_scope


def get_db() -> Generator[Session, None, None]:
    """Provide a database session for FastAPI routes."""

    with session_scope() as session:
        yield session


def pagination_params(limit: int | None = None, offset: int = 0) -> tuple[int, int]:
    settings = get_settings()
    if limit is None:
        limit = settings.default_page_size
    if limit > settings.max_page_size:
        limit = settings.max_page_size
    return limit, offset
