"""Reusable fakes and builders for catalog reconciliation tests."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from discshelf.domain.model import (
    LOOKUP_CLASS_BY_KIND,
    ImportRecord,
    LookupEntity,
    LookupKind,
    Release,
    normalize_name,
    reference_from,
)
from discshelf.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence
    from pathlib import Path
    from types import TracebackType
    from uuid import UUID

    from discshelf.domain.reconciliation import LookupValidation


def make_record(
    external_id: int = 1,
    title: str | None = None,
    *,
    label_id: int | None = None,
    label_name: str | None = None,
    country_id: int | None = None,
    format_id: int | None = None,
    packaging_id: int | None = None,
    artist_ids: Sequence[int] = (),
    artist_names: Sequence[str] = (),
    genre_ids: Sequence[int] = (),
    genre_names: Sequence[str] = (),
    catalog_number: str | None = None,
    upc: str | None = None,
) -> ImportRecord:
    return ImportRecord(
        external_id=external_id,
        title=title or f"Release {external_id}",
        label=reference_from(label_id, label_name),
        country=reference_from(country_id, None),
        format=reference_from(format_id, None),
        packaging=reference_from(packaging_id, None),
        artist_ids=tuple(artist_ids),
        artist_names=tuple(artist_names),
        genre_ids=tuple(genre_ids),
        genre_names=tuple(genre_names),
        catalog_number=catalog_number,
        upc=upc,
    )


def make_records(count: int, *, start: int = 1) -> list[ImportRecord]:
    return [make_record(external_id) for external_id in range(start, start + count)]


class FakeLookupRepository:
    """In-memory lookup table; ids are assigned on ``add`` like an autoincrement column."""

    def __init__(self, kind: LookupKind) -> None:
        self.kind = kind
        self.rows: dict[int, LookupEntity] = {}
        self.added: list[LookupEntity] = []
        self.fail_on_get: set[int] = set()
        self.sequence_syncs = 0

    def seed(self, *names: str, owner_id: UUID | None = None) -> list[LookupEntity]:
        entities = [LOOKUP_CLASS_BY_KIND[self.kind](name=name, owner_id=owner_id) for name in names]
        for entity in entities:
            self._store(entity)
        return entities

    def add(self, entity: LookupEntity) -> None:
        self.added.append(entity)
        self._store(entity)

    def count(self) -> int:
        return len(self.rows)

    def get(self, entity_id: int) -> LookupEntity | None:
        if entity_id in self.fail_on_get:
            raise RuntimeError(f"lookup of {self.kind} {entity_id} failed")
        return self.rows.get(entity_id)

    def get_many(self, entity_ids: Iterable[int]) -> list[LookupEntity]:
        return [self.rows[entity_id] for entity_id in entity_ids if entity_id in self.rows]

    def find_by_name(self, name: str, *, owner_id: UUID | None = None) -> LookupEntity | None:
        normalized = normalize_name(name)
        if normalized is None:
            return None
        for entity in self.rows.values():
            visible = entity.owner_id is None or entity.owner_id == owner_id
            if visible and normalize_name(entity.name) == normalized:
                return entity
        return None

    def sync_id_sequence(self) -> None:
        self.sequence_syncs += 1

    def _store(self, entity: LookupEntity) -> None:
        if entity.id is None:
            entity.id = max(self.rows, default=0) + 1
        self.rows[entity.id] = entity


class FakeReleaseRepository:
    def __init__(self) -> None:
        self.rows: dict[int, Release] = {}

    def add(self, entity: Release) -> None:
        if entity.id is None:
            entity.id = max(self.rows, default=0) + 1
        self.rows[entity.id] = entity

    def count(self) -> int:
        return len(self.rows)

    def get(self, release_id: int) -> Release | None:
        return self.rows.get(release_id)

    def get_by_external_id(self, external_id: int) -> Release | None:
        return next((r for r in self.rows.values() if r.external_id == external_id), None)

    def exists_by_external_id(self, external_id: int) -> bool:
        return self.get_by_external_id(external_id) is not None

    def exists_by_discogs_id(self, discogs_id: int, *, owner_id: UUID | None = None) -> bool:
        return any(
            r.discogs_id == discogs_id and (owner_id is None or r.owner_id == owner_id)
            for r in self.rows.values()
        )

    def find_by_catalog_number(
        self, catalog_number: str, *, owner_id: UUID | None = None
    ) -> list[Release]:
        normalized = normalize_name(catalog_number)
        if normalized is None:
            return []
        return [
            r
            for r in self.rows.values()
            if normalize_name(r.catalog_number) == normalized
            and (owner_id is None or r.owner_id == owner_id)
        ]

    def find_by_title(self, title: str, *, owner_id: UUID | None = None) -> list[Release]:
        normalized = normalize_name(title)
        if normalized is None:
            return []
        return [
            r
            for r in self.rows.values()
            if normalize_name(r.title) == normalized
            and (owner_id is None or r.owner_id == owner_id)
        ]


def make_fake_repositories() -> CatalogRepositories:
    return CatalogRepositories(
        artists=FakeLookupRepository(LookupKind.ARTIST),
        genres=FakeLookupRepository(LookupKind.GENRE),
        labels=FakeLookupRepository(LookupKind.LABEL),
        countries=FakeLookupRepository(LookupKind.COUNTRY),
        formats=FakeLookupRepository(LookupKind.FORMAT),
        packagings=FakeLookupRepository(LookupKind.PACKAGING),
        releases=FakeReleaseRepository(),
    )


@dataclass
class FakeCatalogUnitOfWork:
    """Shares one repository collection across entries; records transaction calls.

    Savepoints roll back releases added inside them, which is enough to model
    per-record isolation.
    """

    repositories: CatalogRepositories = field(default_factory=make_fake_repositories)
    entered: int = 0
    commits: int = 0
    rollbacks: int = 0
    flushes: int = 0
    fail_commit: bool = False

    def __enter__(self) -> FakeCatalogUnitOfWork:
        self.entered += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def __call__(self) -> FakeCatalogUnitOfWork:
        return self

    def commit(self) -> None:
        if self.fail_commit:
            raise RuntimeError("commit failed")
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def flush(self) -> None:
        self.flushes += 1

    @contextmanager
    def savepoint(self) -> Iterator[None]:
        releases = self.releases
        before = set(releases.rows)
        try:
            yield
        except BaseException:
            for release_id in set(releases.rows) - before:
                del releases.rows[release_id]
            raise

    @property
    def releases(self) -> FakeReleaseRepository:
        repo = self.repositories.releases
        assert isinstance(repo, FakeReleaseRepository)
        return repo

    def lookups(self, kind: LookupKind) -> FakeLookupRepository:
        repo = self.repositories.lookup(kind)
        assert isinstance(repo, FakeLookupRepository)
        return repo


class FakeDatasetReader:
    def __init__(
        self,
        records: list[ImportRecord] | None = None,
        *,
        exists: bool = True,
        lookup_rows: dict[LookupKind, list[tuple[int, str]]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.records = records
        self._exists = exists
        self.lookup_rows = lookup_rows or {}
        self.error = error
        self.read_calls = 0

    def exists(self, path: Path) -> bool:
        _ = path
        return self._exists

    def read_records(self, path: Path) -> list[ImportRecord] | None:
        _ = path
        self.read_calls += 1
        if self.error is not None:
            raise self.error
        return self.records

    def count(self, path: Path) -> int:
        _ = path
        if self.error is not None:
            raise self.error
        if not self._exists or self.records is None:
            return 0
        return len(self.records)

    def read_lookup_rows(self, path: Path, kind: LookupKind) -> list[tuple[int, str]] | None:
        _ = path
        return self.lookup_rows.get(kind)


class RecordingBatchProcessor:
    """Batch processor double that records every batch it receives."""

    def __init__(self, *, fail_on_call: int | None = None) -> None:
        self.batches: list[list[ImportRecord]] = []
        self.upc_batches: list[list[ImportRecord]] = []
        self.fail_on_call = fail_on_call
        self.validation: LookupValidation | None = None

    def process_batch(self, records: Sequence[ImportRecord] | None) -> int:
        self.batches.append(list(records or ()))
        if self.fail_on_call is not None and len(self.batches) == self.fail_on_call:
            raise RuntimeError("database unavailable")
        return len(records or ())

    def update_upc_batch(self, records: Sequence[ImportRecord] | None) -> int:
        self.upc_batches.append(list(records or ()))
        return sum(1 for record in records or () if record.upc)

    def validate_lookup_data(self) -> LookupValidation:
        assert self.validation is not None
        return self.validation
