"""Dataset import defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from discshelf.domain.reconciliation.batch import DEFAULT_IMPORT_CHUNK_SIZE

from .env import optional_env_int
from .storage import StorageConfig, get_storage_config

DEFAULT_RELEASES_FILENAME: Final[str] = "musicreleases.json"


@dataclass(frozen=True, slots=True)
class ImportConfig:
    dataset_dir: Path
    releases_filename: str = DEFAULT_RELEASES_FILENAME
    chunk_size: int = DEFAULT_IMPORT_CHUNK_SIZE

    @property
    def releases_path(self) -> Path:
        return self.dataset_dir / self.releases_filename


def get_import_config(*, storage: StorageConfig | None = None) -> ImportConfig:
    env_dir = os.getenv("DISCSHELF_DATASET_DIR")
    if env_dir:
        dataset_dir = Path(env_dir).expanduser().resolve()
    else:
        dataset_dir = (storage or get_storage_config()).dataset_dir()
    return ImportConfig(
        dataset_dir=dataset_dir,
        chunk_size=optional_env_int("DISCSHELF_IMPORT_CHUNK_SIZE", DEFAULT_IMPORT_CHUNK_SIZE),
    )
