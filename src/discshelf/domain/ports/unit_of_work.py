"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from discshelf.domain.model import LookupKind

if TYPE_CHECKING:
    from contextlib import AbstractContextManager
    from types import TracebackType

    from discshelf.domain.ports.persistence import LookupRepository, ReleaseRepository


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class CatalogRepositories(RepositoryCollection):
    """Repositories for releases and every lookup table they reference."""

    artists: LookupRepository
    genres: LookupRepository
    labels: LookupRepository
    countries: LookupRepository
    formats: LookupRepository
    packagings: LookupRepository
    releases: ReleaseRepository

    def lookup(self, kind: LookupKind) -> LookupRepository:
        match kind:
            case LookupKind.ARTIST:
                return self.artists
            case LookupKind.GENRE:
                return self.genres
            case LookupKind.LABEL:
                return self.labels
            case LookupKind.COUNTRY:
                return self.countries
            case LookupKind.FORMAT:
                return self.formats
            case LookupKind.PACKAGING:
                return self.packagings


@runtime_checkable
class CatalogUnitOfWork(UnitOfWork[CatalogRepositories], Protocol):
    """Transaction handle passed explicitly to every catalog write.

    ``flush`` pushes pending inserts so generated ids become available;
    ``savepoint`` scopes a nested transaction that is rolled back on error
    without touching the enclosing one.
    """

    def __enter__(self) -> CatalogUnitOfWork: ...

    def flush(self) -> None: ...

    def savepoint(self) -> AbstractContextManager[object]: ...


type CatalogUnitOfWorkFactory = Callable[[], CatalogUnitOfWork]
