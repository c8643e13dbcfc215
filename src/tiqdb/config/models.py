"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, tiq.toml only contains overrides.
A fresh install needs no config file at all — SQLite under XDG_DATA_HOME.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from sqlalchemy.engine import URL

DEFAULT_NAMESPACE = "public"

_ASYNC_DRIVERS = {
    "sqlite": "sqlite+aiosqlite",
    "postgresql": "postgresql+asyncpg",
    "mysql": "mysql+aiomysql",
}


def default_data_file() -> Path:
    """``$XDG_DATA_HOME/tiq/store.db``, falling back to ``~/.local/share``."""
    data_home = os.environ.get("XDG_DATA_HOME")
    base = Path(data_home) if data_home else Path.home() / ".local" / "share"
    return base / "tiq" / "store.db"


class DatabaseConfig(BaseModel):
    """[database] section — the connection descriptor.

    ``filename`` only applies to SQLite; the other fields only apply to
    server backends.
    """

    model_config = {"frozen": True}

    client: Literal["sqlite", "postgresql", "mysql"] = "sqlite"
    host: str = "localhost"
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str = "tiq"
    filename: str = Field(default_factory=lambda: str(default_data_file()))
    echo: bool = False

    @field_validator("filename")
    @classmethod
    def _expand_filename(cls, value: str) -> str:
        if value == ":memory:":
            return value
        return str(Path(value).expanduser())

    @property
    def is_sqlite(self) -> bool:
        return self.client == "sqlite"

    @property
    def is_memory(self) -> bool:
        return self.is_sqlite and self.filename == ":memory:"

    def url(self) -> URL:
        """Build the SQLAlchemy async URL for this descriptor."""
        driver = _ASYNC_DRIVERS[self.client]
        if self.is_sqlite:
            return URL.create(driver, database=self.filename)
        return URL.create(
            driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    default_namespace: str = DEFAULT_NAMESPACE
    search_limit: int = 100

