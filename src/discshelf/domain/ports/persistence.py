"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from discshelf.domain.model import LookupEntity, Release

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...

    def count(self) -> int: ...


@runtime_checkable
class LookupRepository(Repository[LookupEntity], Protocol):
    """Repository contract for one lookup table (artists, genres, labels, ...)."""

    def get(self, entity_id: int) -> LookupEntity | None: ...

    def get_many(self, entity_ids: Iterable[int]) -> list[LookupEntity]: ...

    def find_by_name(self, name: str, *, owner_id: UUID | None = None) -> LookupEntity | None:
        """Case-insensitive exact match on the trimmed name.

        Rows owned by ``owner_id`` and shared rows (no owner) are both visible.
        """
        ...

    def sync_id_sequence(self) -> None:
        """Make generated ids continue after the highest stored id."""
        ...


@runtime_checkable
class ReleaseRepository(Repository[Release], Protocol):
    """Repository contract for releases."""

    def get(self, release_id: int) -> Release | None: ...

    def get_by_external_id(self, external_id: int) -> Release | None: ...

    def exists_by_external_id(self, external_id: int) -> bool: ...

    def exists_by_discogs_id(self, discogs_id: int, *, owner_id: UUID | None = None) -> bool: ...

    def find_by_catalog_number(
        self, catalog_number: str, *, owner_id: UUID | None = None
    ) -> list[Release]: ...

    def find_by_title(self, title: str, *, owner_id: UUID | None = None) -> list[Release]: ...
