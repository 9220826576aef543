"""SQLAlchemy adapter package for discshelf."""

from __future__ import annotations

from .mappings import (
    LOOKUP_TABLES,
    create_all_tables,
    mapper_registry,
    release_table,
    start_mappers,
)
from .repositories import SqlAlchemyLookupRepository, SqlAlchemyReleaseRepository
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "LOOKUP_TABLES",
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyLookupRepository",
    "SqlAlchemyReleaseRepository",
    "StartupError",
    "create_all_tables",
    "mapper_registry",
    "release_table",
    "shutdown",
    "start_mappers",
    "startup",
]
