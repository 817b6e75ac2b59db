"""Application configuration helpers."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path


def _default_data_root() -> Path:
    """Return the platform specific directory used for persistent data."""

    if os.name == "nt":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home()))
        return base / "OrderDesk"
    return Path.home() / ".orderdesk"


def _default_database_path() -> Path:
    """Resolve the snapshot database path taking overrides into account."""

    override = os.environ.get("ORDERDESK_DB")
    if override:
        return Path(override).expanduser()
    return _default_data_root() / "snapshots.sqlite3"


@dataclass(slots=True)
class Settings:
    """Runtime configuration loaded from environment variables."""

    app_name: str = field(default_factory=lambda: os.environ.get("ORDERDESK_APP_NAME", "OrderDesk"))
    host: str = field(default_factory=lambda: os.environ.get("ORDERDESK_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.environ.get("ORDERDESK_PORT", "8000")))
    reload: bool = field(default_factory=lambda: os.environ.get("ORDERDESK_RELOAD", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.environ.get("ORDERDESK_LOG_LEVEL", "info"))
    database_path: Path = field(default_factory=_default_database_path)
    currency: str = field(default_factory=lambda: os.environ.get("ORDERDESK_CURRENCY", "INR"))
    cors_origins: list[str] = field(
        default_factory=lambda: [o.strip() for o in os.environ.get("ORDERDESK_CORS_ORIGINS", "*").split(",") if o.strip()]
    )
    api_prefix: str = "/api/v1"
    default_page_size: int = 50
    max_page_size: int = 200

    def ensure_storage(self) -> None:
        """Ensure that the database directory exists."""

        self.database_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.database_path}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    settings = Settings()
    settings.ensure_storage()
    return settings


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for command line and service entry points."""

    name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
