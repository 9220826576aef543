"""Transactional batch import of dataset records."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from discshelf.domain.model import CreatedEntities

from .resolver import EntityResolver

if TYPE_CHECKING:
    from collections.abc import Sequence

    from discshelf.domain.model import ImportRecord
    from discshelf.domain.ports.unit_of_work import CatalogUnitOfWork, CatalogUnitOfWorkFactory

log = getLogger(__name__)

DEFAULT_IMPORT_CHUNK_SIZE: Final[int] = 100


@dataclass(frozen=True, slots=True)
class Imported:
    external_id: int
    release_id: int | None


@dataclass(frozen=True, slots=True)
class Skipped:
    external_id: int
    reason: str = "already imported"


@dataclass(frozen=True, slots=True)
class Failed:
    external_id: int
    reason: str


type RecordOutcome = Imported | Skipped | Failed


def count_imported(outcomes: Sequence[RecordOutcome]) -> int:
    return sum(1 for outcome in outcomes if isinstance(outcome, Imported))


def has_upc(record: ImportRecord) -> bool:
    """Only a missing or empty UPC is skipped; any other value is written as-is."""

    return bool(record.upc)


@dataclass(frozen=True, slots=True)
class LookupValidation:
    is_valid: bool
    errors: tuple[str, ...] = ()


@dataclass(slots=True)
class BatchProcessor:
    """Import a batch of records in one unit of work.

    Each record runs in its own savepoint, so one bad record is rolled back and
    reported as ``Failed`` while the rest of the batch still commits.
    """

    unit_of_work_factory: CatalogUnitOfWorkFactory
    resolver: EntityResolver = field(default_factory=EntityResolver)

    def process_batch(self, records: Sequence[ImportRecord] | None) -> int:
        return count_imported(self.process_batch_outcomes(records))

    def process_batch_outcomes(self, records: Sequence[ImportRecord] | None) -> list[RecordOutcome]:
        if not records:
            return []

        created = CreatedEntities()
        with self.unit_of_work_factory() as uow:
            outcomes = [self._import_record(uow, record, created) for record in records]
            uow.commit()

        failed = [outcome for outcome in outcomes if isinstance(outcome, Failed)]
        log.info(
            f"Processed batch of {len(records)} records: imported={count_imported(outcomes)}, "
            f"skipped={sum(isinstance(o, Skipped) for o in outcomes)}, failed={len(failed)}, "
            f"new lookups={len(created)}"
        )
        return outcomes

    def update_upc_batch(self, records: Sequence[ImportRecord] | None) -> int:
        if not records:
            return 0

        updated = skipped = not_found = 0
        with self.unit_of_work_factory() as uow:
            releases = uow.repositories.releases
            for record in records:
                if not has_upc(record):
                    skipped += 1
                    continue
                release = releases.get_by_external_id(record.external_id)
                if release is None:
                    not_found += 1
                    continue
                release.upc = record.upc
                updated += 1
            uow.commit()

        log.info(f"UPC update batch: updated={updated}, skipped={skipped}, not_found={not_found}")
        return updated

    def validate_lookup_data(self) -> LookupValidation:
        errors: list[str] = []
        try:
            with self.unit_of_work_factory() as uow:
                repositories = uow.repositories
                counts = {
                    "countries": repositories.countries.count(),
                    "formats": repositories.formats.count(),
                    "labels": repositories.labels.count(),
                    "packagings": repositories.packagings.count(),
                }
        except Exception as exc:  # noqa: BLE001
            log.exception("Error validating lookup data")
            message = f"Error validating lookup data: {exc}"
            return LookupValidation(is_valid=False, errors=(message,))

        errors.extend(
            f"No {table} found in database" for table, count in counts.items() if not count
        )
        log.info(
            "Lookup data validation: "
            + ", ".join(f"{table}={count}" for table, count in counts.items())
        )
        return LookupValidation(is_valid=not errors, errors=tuple(errors))

    def _import_record(
        self,
        uow: CatalogUnitOfWork,
        record: ImportRecord,
        created: CreatedEntities,
    ) -> RecordOutcome:
        record_created = CreatedEntities()
        try:
            with uow.savepoint():
                if uow.repositories.releases.exists_by_external_id(record.external_id):
                    log.debug(f"Release {record.external_id} already imported, skipping")
                    return Skipped(external_id=record.external_id)
                release = self.resolver.build_release(uow, record, record_created)
                uow.repositories.releases.add(release)
                uow.flush()
        except Exception as exc:  # noqa: BLE001
            log.exception(f"Error importing release {record.external_id} - {record.title}")
            return Failed(external_id=record.external_id, reason=str(exc) or type(exc).__name__)

        created.merge(record_created)
        return Imported(external_id=record.external_id, release_id=release.id)

