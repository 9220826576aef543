"""Import a user's Discogs collection into the catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from discshelf.domain.model import CreatedEntities
from discshelf.domain.reconciliation import EntityResolver

if TYPE_CHECKING:
    from uuid import UUID

    from discshelf.domain.model import ReleaseDraft
    from discshelf.domain.ports.fetching import CollectionFetcher
    from discshelf.domain.ports.unit_of_work import CatalogUnitOfWork, CatalogUnitOfWorkFactory

log = getLogger(__name__)


@dataclass(slots=True)
class DiscogsImportResult:
    total: int = 0
    imported: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list[str])
    created: CreatedEntities = field(default_factory=CreatedEntities)

    @property
    def success(self) -> bool:
        return self.imported > 0 or (self.total == self.skipped and self.failed == 0)


def import_collection(
    fetcher: CollectionFetcher,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
    *,
    owner_id: UUID | None = None,
    username: str | None = None,
    max_releases: int | None = None,
    resolver: EntityResolver | None = None,
) -> DiscogsImportResult:
    """Fetch the collection and insert every release not already imported.

    Releases are matched on their Discogs id. A failing release is rolled back
    on its own and reported in ``errors``; the rest commit together.
    """

    resolver = resolver or EntityResolver(owner_id=owner_id)
    drafts = fetcher(username=username, max_releases=max_releases)
    result = DiscogsImportResult(total=len(drafts))
    log.info(f"Found {result.total} releases in Discogs collection")

    with unit_of_work_factory() as uow:
        for draft in drafts:
            _import_one(uow, draft, resolver, result, owner_id=owner_id)
        uow.commit()

    if result.total and not result.imported and result.failed:
        result.errors.append("No releases could be imported. All releases failed to import.")
    log.info(
        f"Discogs import completed: {result.imported} imported, "
        f"{result.skipped} skipped, {result.failed} failed"
    )
    return result


def _import_one(
    uow: CatalogUnitOfWork,
    draft: ReleaseDraft,
    resolver: EntityResolver,
    result: DiscogsImportResult,
    *,
    owner_id: UUID | None,
) -> None:
    releases = uow.repositories.releases
    if draft.discogs_id is not None and releases.exists_by_discogs_id(
        draft.discogs_id, owner_id=owner_id
    ):
        result.skipped += 1
        return

    created = CreatedEntities()
    try:
        with uow.savepoint():
            release = resolver.build_release(uow, draft, created)
            releases.add(release)
            uow.flush()
    except Exception as exc:  # noqa: BLE001
        log.exception(f"Error importing release: {draft.title}")
        result.failed += 1
        result.errors.append(f"Error importing '{draft.title}': {exc}")
        return

    result.imported += 1
    result.created.merge(created)
    log.debug(f"Imported release: {release.title} (Discogs ID: {release.discogs_id})")
