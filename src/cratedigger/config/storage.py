"""Locations of the album database and the HTTP response cache."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DATA_DIR_ENV: Final[str] = "CRATEDIGGER_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"
DATABASE_FILENAME: Final[str] = "cratedigger.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """The data directory; created on first use of either file inside it."""

    data_dir: Path

    def _file(self, filename: str) -> Path:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir / filename

    @property
    def database_path(self) -> Path:
        return self._file(DATABASE_FILENAME)

    @property
    def http_cache_path(self) -> Path:
        return self._file(HTTP_CACHE_FILENAME)


def get_storage_config() -> StorageConfig:
    configured = os.getenv(DATA_DIR_ENV)
    if configured:
        data_dir = Path(configured)
    else:
        xdg_data_home = os.getenv("XDG_DATA_HOME")
        base = Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"
        data_dir = base / "cratedigger"
    return StorageConfig(data_dir=data_dir.expanduser().resolve())


def get_database_uri(*, storage: StorageConfig | None = None) -> str:
    """``DATABASE_URI`` if set, else the sqlite file in the data directory."""

    configured = os.getenv(DATABASE_URI_ENV)
    if configured:
        return configured
    storage_config = storage or get_storage_config()
    return f"sqlite+pysqlite:///{storage_config.database_path}"
