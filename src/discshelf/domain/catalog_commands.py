"""Create and update single releases, refusing likely duplicates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from discshelf.domain.model import CreatedEntities, Release
from discshelf.domain.reconciliation import DuplicateDetector, EntityResolver

if TYPE_CHECKING:
    from uuid import UUID

    from discshelf.domain.model import ReleaseDraft
    from discshelf.domain.ports.unit_of_work import CatalogUnitOfWork, CatalogUnitOfWorkFactory

log = getLogger(__name__)

# Fields copied onto an existing release by ``update_release``.
_UPDATABLE_FIELDS = (
    "title",
    "discogs_id",
    "release_year",
    "original_release_year",
    "catalog_number",
    "upc",
    "live",
    "length_seconds",
    "label_id",
    "country_id",
    "format_id",
    "packaging_id",
    "artist_ids",
    "genre_ids",
    "links",
    "media",
)


@dataclass(slots=True)
class CreateReleaseResult:
    """Outcome of a create or update.

    ``release`` is ``None`` when duplicates blocked the write or the release
    to update does not exist.
    """

    release: Release | None
    created: CreatedEntities = field(default_factory=CreatedEntities)
    duplicates: list[Release] = field(default_factory=list[Release])
    not_found: bool = False

    @property
    def saved(self) -> bool:
        return self.release is not None


def create_release(
    unit_of_work_factory: CatalogUnitOfWorkFactory,
    draft: ReleaseDraft,
    *,
    owner_id: UUID | None = None,
    detector: DuplicateDetector | None = None,
    resolver: EntityResolver | None = None,
    now: datetime | None = None,
) -> CreateReleaseResult:
    detector = detector or DuplicateDetector(owner_id=owner_id)
    resolver = resolver or EntityResolver(owner_id=owner_id)
    timestamp = now or datetime.now(UTC)
    created = CreatedEntities()

    with unit_of_work_factory() as uow:
        duplicates = _find_duplicates(uow, detector, draft)
        if duplicates:
            log.info(
                f"Refusing to create {draft.title!r}: {len(duplicates)} possible duplicate(s)"
            )
            return CreateReleaseResult(release=None, created=created, duplicates=duplicates)

        release = resolver.build_release(uow, draft, created)
        release.date_added = release.date_added or timestamp
        release.last_modified = timestamp
        uow.repositories.releases.add(release)
        uow.commit()

    log.info(f"Created release {release.title!r} (id {release.id}, {len(created)} new lookups)")
    return CreateReleaseResult(release=release, created=created)


def update_release(
    unit_of_work_factory: CatalogUnitOfWorkFactory,
    release_id: int,
    draft: ReleaseDraft,
    *,
    owner_id: UUID | None = None,
    detector: DuplicateDetector | None = None,
    resolver: EntityResolver | None = None,
    now: datetime | None = None,
) -> CreateReleaseResult:
    detector = detector or DuplicateDetector(owner_id=owner_id)
    resolver = resolver or EntityResolver(owner_id=owner_id)
    created = CreatedEntities()

    with unit_of_work_factory() as uow:
        existing = uow.repositories.releases.get(release_id)
        if existing is None:
            log.warning(f"Release {release_id} not found")
            return CreateReleaseResult(release=None, created=created, not_found=True)

        duplicates = _find_duplicates(uow, detector, draft, exclude_id=release_id)
        if duplicates:
            log.info(f"Refusing to update release {release_id}: possible duplicates found")
            return CreateReleaseResult(release=None, created=created, duplicates=duplicates)

        replacement = resolver.build_release(uow, draft, created)
        for name in _UPDATABLE_FIELDS:
            setattr(existing, name, getattr(replacement, name))
        existing.last_modified = now or datetime.now(UTC)
        uow.commit()

    return CreateReleaseResult(release=existing, created=created)


def _find_duplicates(
    uow: CatalogUnitOfWork,
    detector: DuplicateDetector,
    draft: ReleaseDraft,
    *,
    exclude_id: int | None = None,
) -> list[Release]:
    referenced = uow.repositories.artists.get_many(draft.artist_ids)
    artist_names = [*draft.artist_names, *(artist.name for artist in referenced)]
    return detector.find_duplicates(
        uow,
        catalog_number=draft.catalog_number,
        title=draft.title,
        artist_names=artist_names,
        exclude_id=exclude_id,
    )
