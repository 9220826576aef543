"""Application configuration helpers."""

from __future__ import annotations

from .discogs import DiscogsConfig, get_discogs_config
from .env import ConfigurationError, optional_env_int, require_env_vars
from .http_client import HttpClientConfig
from .importing import DEFAULT_IMPORT_CHUNK_SIZE, ImportConfig, get_import_config
from .logging import configure_logging
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_storage_config,
)

__all__ = [
    "DEFAULT_IMPORT_CHUNK_SIZE",
    "ConfigurationError",
    "DatabaseConfig",
    "DiscogsConfig",
    "HttpClientConfig",
    "ImportConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_discogs_config",
    "get_import_config",
    "get_storage_config",
    "optional_env_int",
    "require_env_vars",
]
