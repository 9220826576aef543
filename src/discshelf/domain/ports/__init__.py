"""Domain port definitions for adapters."""

from __future__ import annotations

from .dataset import DatasetReader
from .fetching import CollectionFetcher
from .persistence import LookupRepository, ReleaseRepository, Repository
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    CatalogUnitOfWorkFactory,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "CatalogUnitOfWorkFactory",
    "CollectionFetcher",
    "DatasetReader",
    "LookupRepository",
    "Repository",
    "ReleaseRepository",
    "RepositoryCollection",
    "UnitOfWork",
]
