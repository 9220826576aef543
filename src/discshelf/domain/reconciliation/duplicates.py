"""Advisory duplicate detection for single-release create and update."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from discshelf.domain.model import normalize_name

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from discshelf.domain.model import Release
    from discshelf.domain.ports.unit_of_work import CatalogUnitOfWork


@dataclass(slots=True)
class DuplicateDetector:
    """Find releases that likely describe the same physical item.

    A release is a candidate when its catalog number matches, or when its
    title matches and at least one artist name is shared. All comparisons use
    trimmed, case-folded values. Detection is read-only.
    """

    owner_id: UUID | None = None

    def find_duplicates(
        self,
        uow: CatalogUnitOfWork,
        *,
        catalog_number: str | None,
        title: str | None,
        artist_names: Iterable[str] | None,
        exclude_id: int | None = None,
    ) -> list[Release]:
        releases = uow.repositories.releases
        matches: dict[int | None, Release] = {}

        if normalize_name(catalog_number) is not None:
            for release in releases.find_by_catalog_number(
                catalog_number or "", owner_id=self.owner_id
            ):
                matches.setdefault(release.id, release)

        wanted_artists = {
            normalized
            for normalized in (normalize_name(name) for name in artist_names or ())
            if normalized is not None
        }
        if normalize_name(title) is not None and wanted_artists:
            for release in releases.find_by_title(title or "", owner_id=self.owner_id):
                if release.id in matches:
                    continue
                if wanted_artists & self._artist_names(uow, release):
                    matches[release.id] = release

        return [
            release
            for release in matches.values()
            if exclude_id is None or release.id != exclude_id
        ]

    def is_duplicate(
        self,
        uow: CatalogUnitOfWork,
        *,
        catalog_number: str | None,
        title: str | None,
        artist_names: Iterable[str] | None,
        exclude_id: int | None = None,
    ) -> bool:
        return bool(
            self.find_duplicates(
                uow,
                catalog_number=catalog_number,
                title=title,
                artist_names=artist_names,
                exclude_id=exclude_id,
            )
        )

    @staticmethod
    def _artist_names(uow: CatalogUnitOfWork, release: Release) -> set[str]:
        artists = uow.repositories.artists.get_many(release.artist_ids)
        return {
            normalized
            for normalized in (normalize_name(artist.name) for artist in artists)
            if normalized is not None
        }
