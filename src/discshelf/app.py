"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from discshelf.adapters.discogs import DiscogsCollectionFetcher
from discshelf.adapters.json_dataset import JsonDatasetReader
from discshelf.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from discshelf.config.discogs import get_discogs_config
from discshelf.config.importing import get_import_config
from discshelf.domain.discogs_import import DiscogsImportResult, import_collection
from discshelf.domain.reconciliation import (
    BatchProcessor,
    EntityResolver,
    ImportOrchestrator,
    ImportProgress,
    LookupValidation,
)
from discshelf.domain.seeding import seed_lookups

if TYPE_CHECKING:
    from uuid import UUID

    from discshelf.config.importing import ImportConfig
    from discshelf.domain.model import LookupKind
    from discshelf.domain.ports.dataset import DatasetReader
    from discshelf.domain.ports.fetching import CollectionFetcher
    from discshelf.domain.ports.unit_of_work import CatalogUnitOfWorkFactory

log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def build_import_orchestrator(
    *,
    import_config: ImportConfig | None = None,
    reader: DatasetReader | None = None,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
    owner_id: UUID | None = None,
) -> ImportOrchestrator:
    if unit_of_work_factory is None:
        _ensure_started()
    config = import_config or get_import_config()
    uow_factory = unit_of_work_factory or SqlAlchemyCatalogUnitOfWork
    return ImportOrchestrator(
        reader=reader or JsonDatasetReader(),
        batch_processor=BatchProcessor(
            unit_of_work_factory=uow_factory,
            resolver=EntityResolver(owner_id=owner_id),
        ),
        unit_of_work_factory=uow_factory,
        dataset_path=config.releases_path,
        chunk_size=config.chunk_size,
    )


def import_releases(
    *,
    batch_size: int | None = None,
    skip: int = 0,
    orchestrator: ImportOrchestrator | None = None,
) -> int:
    """Import the release dataset; a ``batch_size`` imports only that slice."""

    active = orchestrator or build_import_orchestrator()
    log.info(f"Starting release import from {active.dataset_path}")
    if batch_size is None:
        return active.import_all()
    return active.import_batch(batch_size, skip)


def update_upc_values(*, orchestrator: ImportOrchestrator | None = None) -> int:
    return (orchestrator or build_import_orchestrator()).update_upc_values()


def import_progress(*, orchestrator: ImportOrchestrator | None = None) -> ImportProgress:
    return (orchestrator or build_import_orchestrator()).get_progress()


def validate_lookup_data(*, orchestrator: ImportOrchestrator | None = None) -> LookupValidation:
    return (orchestrator or build_import_orchestrator()).validate_lookup_data()


def seed_lookup_tables(
    *,
    import_config: ImportConfig | None = None,
    reader: DatasetReader | None = None,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> dict[LookupKind, int]:
    if unit_of_work_factory is None:
        _ensure_started()
    config = import_config or get_import_config()
    log.info(f"Seeding lookup tables from {config.dataset_dir}")
    return seed_lookups(
        reader or JsonDatasetReader(),
        unit_of_work_factory or SqlAlchemyCatalogUnitOfWork,
        config.dataset_dir,
    )


def import_discogs_collection(
    *,
    username: str | None = None,
    owner_id: UUID | None = None,
    max_releases: int | None = None,
    fetcher: CollectionFetcher | None = None,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> DiscogsImportResult:
    if unit_of_work_factory is None:
        _ensure_started()
    if fetcher is None:
        fetcher = DiscogsCollectionFetcher(config=get_discogs_config(username=username))
    return import_collection(
        fetcher,
        unit_of_work_factory or SqlAlchemyCatalogUnitOfWork,
        owner_id=owner_id,
        username=username,
        max_releases=max_releases,
    )
