"""Bulk-load lookup tables from dataset files."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from discshelf.domain.model import LOOKUP_CLASS_BY_KIND, LookupKind

if TYPE_CHECKING:
    from pathlib import Path

    from discshelf.domain.ports.dataset import DatasetReader
    from discshelf.domain.ports.unit_of_work import CatalogUnitOfWorkFactory

log = getLogger(__name__)

SEED_ORDER: Final[tuple[LookupKind, ...]] = (
    LookupKind.COUNTRY,
    LookupKind.FORMAT,
    LookupKind.GENRE,
    LookupKind.LABEL,
    LookupKind.ARTIST,
    LookupKind.PACKAGING,
)


def seed_lookups(
    reader: DatasetReader,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
    dataset_dir: Path,
) -> dict[LookupKind, int]:
    """Insert seed rows, keeping their dataset ids, into every empty lookup table.

    Tables that already hold data are left untouched. Returns the number of
    rows inserted per kind.
    """

    inserted: dict[LookupKind, int] = {}
    with unit_of_work_factory() as uow:
        for kind in SEED_ORDER:
            repository = uow.repositories.lookup(kind)
            if repository.count() > 0:
                log.info(f"{kind} table already has data, skipping seed")
                inserted[kind] = 0
                continue

            rows = reader.read_lookup_rows(dataset_dir, kind) or []
            entity_cls = LOOKUP_CLASS_BY_KIND[kind]
            for row_id, name in rows:
                repository.add(entity_cls(id=row_id, name=name))
            uow.flush()
            if rows:
                repository.sync_id_sequence()
            inserted[kind] = len(rows)
            log.info(f"Seeded {len(rows)} {kind} rows")
        uow.commit()
    return inserted
