"""Locations of the catalog database and import datasets."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "discshelf"
DEFAULT_DB_FILENAME: Final[str] = "discshelf.db"
DATASET_DIRNAME: Final[str] = "data"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Everything discshelf writes lives below ``data_dir``."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME
    dataset_dirname: str = DATASET_DIRNAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def database_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.database_filename

    def dataset_dir(self) -> Path:
        # read-only input; never created here
        return self.resolve_data_dir() / self.dataset_dirname

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_home() -> Path:
    if os.name == "nt":
        env_name, fallback = "LOCALAPPDATA", Path.home() / "AppData" / "Local"
    else:
        env_name, fallback = "XDG_DATA_HOME", Path.home() / ".local" / "share"
    configured = os.getenv(env_name)
    return Path(configured) if configured else fallback


def get_storage_config() -> StorageConfig:
    """``DISCSHELF_DATA_DIR`` wins over the platform data home."""

    override = os.getenv("DISCSHELF_DATA_DIR")
    data_dir = Path(override) if override else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    uri = os.getenv("DATABASE_URI") or (storage or get_storage_config()).database_uri()
    return DatabaseConfig(uri=uri)
