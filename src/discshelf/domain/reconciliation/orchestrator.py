"""Drive a full dataset import through the batch processor in bounded chunks."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import batched
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from discshelf.domain.model import ImportRunState

from .batch import DEFAULT_IMPORT_CHUNK_SIZE

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from discshelf.domain.model import ImportRecord
    from discshelf.domain.ports.dataset import DatasetReader
    from discshelf.domain.ports.unit_of_work import CatalogUnitOfWorkFactory

    from .batch import LookupValidation

log = getLogger(__name__)


class ImportAbortedError(RuntimeError):
    """Raised when a chunk fails; earlier chunks stay committed."""

    def __init__(self, message: str, *, imported: int) -> None:
        super().__init__(message)
        self.imported = imported


class RecordBatchProcessor(Protocol):
    def process_batch(self, records: Sequence[ImportRecord] | None) -> int: ...

    def update_upc_batch(self, records: Sequence[ImportRecord] | None) -> int: ...

    def validate_lookup_data(self) -> LookupValidation: ...


@dataclass(slots=True)
class ImportProgress:
    total_records: int
    imported_records: int
    errors: list[str] = field(default_factory=list[str])

    @property
    def percentage(self) -> float:
        if self.total_records == 0:
            return 0.0
        return self.imported_records / self.total_records * 100


class ImportOrchestrator:
    def __init__(
        self,
        *,
        reader: DatasetReader,
        batch_processor: RecordBatchProcessor,
        unit_of_work_factory: CatalogUnitOfWorkFactory,
        dataset_path: Path,
        chunk_size: int = DEFAULT_IMPORT_CHUNK_SIZE,
    ) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self.reader = reader
        self.batch_processor = batch_processor
        self.unit_of_work_factory = unit_of_work_factory
        self.dataset_path = dataset_path
        self.chunk_size = chunk_size
        self.state = ImportRunState.NOT_STARTED

    def import_all(self) -> int:
        """Import every record, one transaction per chunk, and return the imported count."""

        records = self._read_for_import()
        if not records:
            self.state = ImportRunState.COMMITTED
            return 0

        self.state = ImportRunState.IMPORTING
        total_imported = 0
        for number, chunk in enumerate(batched(records, self.chunk_size), start=1):
            try:
                count = self.batch_processor.process_batch(list(chunk))
            except Exception as exc:
                self.state = ImportRunState.ABORTED
                log.exception(f"Import aborted in batch {number} after {total_imported} releases")
                raise ImportAbortedError(
                    f"Import aborted in batch {number}: {exc}", imported=total_imported
                ) from exc
            total_imported += count
            log.info(
                f"Imported batch {number}: {count} releases "
                f"(Total: {total_imported}/{len(records)})"
            )

        self.state = ImportRunState.COMMITTED
        log.info(f"Import finished: {total_imported} of {len(records)} releases imported")
        return total_imported

    def import_batch(self, batch_size: int, skip_count: int = 0) -> int:
        if batch_size < 1 or skip_count < 0:
            raise ValueError("batch_size must be positive and skip_count non-negative")

        records = self._read_for_import()
        if not records:
            self.state = ImportRunState.COMMITTED
            return 0

        self.state = ImportRunState.IMPORTING
        window = records[skip_count : skip_count + batch_size]
        try:
            count = self.batch_processor.process_batch(window)
        except Exception:
            self.state = ImportRunState.ABORTED
            raise
        self.state = ImportRunState.COMMITTED
        log.info(f"Imported {count} releases (skip={skip_count}, take={batch_size})")
        return count

    def get_count(self) -> int:
        return self.reader.count(self.dataset_path)

    def get_progress(self) -> ImportProgress:
        errors: list[str] = []
        total = 0
        imported = 0
        try:
            total = self.get_count()
        except Exception as exc:  # noqa: BLE001
            log.exception("Could not count dataset records")
            errors.append(f"Could not read dataset: {exc}")
        try:
            with self.unit_of_work_factory() as uow:
                imported = uow.repositories.releases.count()
        except Exception as exc:  # noqa: BLE001
            log.exception("Could not count imported releases")
            errors.append(f"Could not count imported releases: {exc}")
        return ImportProgress(total_records=total, imported_records=imported, errors=errors)

    def update_upc_values(self) -> int:
        records = self._read_records()
        if not records:
            return 0
        updated = self.batch_processor.update_upc_batch(records)
        log.info(f"Updated UPC values for {updated} releases")
        return updated

    def validate_lookup_data(self) -> LookupValidation:
        return self.batch_processor.validate_lookup_data()

    def _read_for_import(self) -> list[ImportRecord]:
        self.state = ImportRunState.READING
        try:
            return self._read_records()
        except Exception:
            self.state = ImportRunState.ABORTED
            raise

    def _read_records(self) -> list[ImportRecord]:
        if not self.reader.exists(self.dataset_path):
            log.warning(f"Dataset not found at {self.dataset_path}")
            return []
        records = self.reader.read_records(self.dataset_path)
        if not records:
            log.warning(f"No releases found in {self.dataset_path}")
            return []
        return records
