"""Resolve id-or-name references to lookup rows, creating missing rows by name.

Rules:
- a known id wins and is returned unchanged; nothing is created for it
- an unknown id falls back to the name when one is supplied
- plural id lists (artists, genres) are kept as given, in order, without a
  lookup; resolved names are appended after them
- names are trimmed and matched case-insensitively inside the caller's unit of
  work, so a row created earlier in the same transaction is found again
- every created row is flushed (to obtain its id) and recorded in the
  caller's ``CreatedEntities``

Store failures propagate unchanged; the caller owns the transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from discshelf.domain.model import (
    ById,
    ByIdOrName,
    ByName,
    LookupKind,
    Release,
    new_lookup,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from discshelf.domain.model import CreatedEntities, Reference, ReleaseDraft
    from discshelf.domain.ports.unit_of_work import CatalogUnitOfWork

log = getLogger(__name__)


@dataclass(slots=True)
class EntityResolver:
    owner_id: UUID | None = None

    def resolve_or_create(
        self,
        uow: CatalogUnitOfWork,
        kind: LookupKind,
        reference: Reference,
        created: CreatedEntities,
    ) -> int | None:
        match reference:
            case ById(id=ref_id):
                return self._find_by_id(uow, kind, ref_id)
            case ByIdOrName(id=ref_id, name=name):
                found = self._find_by_id(uow, kind, ref_id)
                if found is not None:
                    return found
                return self._resolve_name(uow, kind, name, created)
            case ByName(name=name):
                return self._resolve_name(uow, kind, name, created)
            case _:
                return None

    def resolve_or_create_label(
        self, uow: CatalogUnitOfWork, reference: Reference, created: CreatedEntities
    ) -> int | None:
        return self.resolve_or_create(uow, LookupKind.LABEL, reference, created)

    def resolve_or_create_country(
        self, uow: CatalogUnitOfWork, reference: Reference, created: CreatedEntities
    ) -> int | None:
        return self.resolve_or_create(uow, LookupKind.COUNTRY, reference, created)

    def resolve_or_create_format(
        self, uow: CatalogUnitOfWork, reference: Reference, created: CreatedEntities
    ) -> int | None:
        return self.resolve_or_create(uow, LookupKind.FORMAT, reference, created)

    def resolve_or_create_packaging(
        self, uow: CatalogUnitOfWork, reference: Reference, created: CreatedEntities
    ) -> int | None:
        return self.resolve_or_create(uow, LookupKind.PACKAGING, reference, created)

    def resolve_or_create_artists(
        self,
        uow: CatalogUnitOfWork,
        ids: Iterable[int] | None,
        names: Iterable[str] | None,
        created: CreatedEntities,
    ) -> list[int] | None:
        return self._resolve_many(uow, LookupKind.ARTIST, ids, names, created)

    def resolve_or_create_genres(
        self,
        uow: CatalogUnitOfWork,
        ids: Iterable[int] | None,
        names: Iterable[str] | None,
        created: CreatedEntities,
    ) -> list[int] | None:
        return self._resolve_many(uow, LookupKind.GENRE, ids, names, created)

    def build_release(
        self,
        uow: CatalogUnitOfWork,
        draft: ReleaseDraft,
        created: CreatedEntities,
    ) -> Release:
        """Resolve every reference of ``draft`` and return an unsaved release."""

        title = draft.title.strip()
        if not title:
            raise ValueError("Release title is required")
        return Release(
            title=title,
            external_id=draft.external_id,
            discogs_id=draft.discogs_id,
            release_year=draft.release_year,
            original_release_year=draft.original_release_year,
            catalog_number=draft.catalog_number,
            upc=draft.upc,
            live=draft.live,
            length_seconds=draft.length_seconds,
            label_id=self.resolve_or_create_label(uow, draft.label, created),
            country_id=self.resolve_or_create_country(uow, draft.country, created),
            format_id=self.resolve_or_create_format(uow, draft.format, created),
            packaging_id=self.resolve_or_create_packaging(uow, draft.packaging, created),
            artist_ids=self.resolve_or_create_artists(
                uow, draft.artist_ids, draft.artist_names, created
            )
            or [],
            genre_ids=self.resolve_or_create_genres(
                uow, draft.genre_ids, draft.genre_names, created
            )
            or [],
            links=draft.links,
            media=draft.media,
            owner_id=self.owner_id,
            date_added=draft.date_added,
            last_modified=draft.last_modified,
        )

    def _resolve_many(
        self,
        uow: CatalogUnitOfWork,
        kind: LookupKind,
        ids: Iterable[int] | None,
        names: Iterable[str] | None,
        created: CreatedEntities,
    ) -> list[int] | None:
        id_list = list(ids or ())
        name_list = list(names or ())
        if not id_list and not name_list:
            return None

        resolved = id_list
        for name in name_list:
            entity_id = self._resolve_name(uow, kind, name, created)
            if entity_id is not None:
                resolved.append(entity_id)
        return resolved

    def _find_by_id(self, uow: CatalogUnitOfWork, kind: LookupKind, ref_id: int) -> int | None:
        entity = uow.repositories.lookup(kind).get(ref_id)
        return entity.id if entity is not None else None

    def _resolve_name(
        self,
        uow: CatalogUnitOfWork,
        kind: LookupKind,
        name: str,
        created: CreatedEntities,
    ) -> int | None:
        cleaned = name.strip()
        if not cleaned:
            return None

        repository = uow.repositories.lookup(kind)
        existing = repository.find_by_name(cleaned, owner_id=self.owner_id)
        if existing is not None:
            log.debug(f"Found existing {kind} {cleaned!r} (id {existing.id})")
            return existing.id

        entity = new_lookup(kind, cleaned, owner_id=self.owner_id)
        repository.add(entity)
        uow.flush()
        created.add(entity)
        log.info(f"Created new {kind} {cleaned!r} (id {entity.id})")
        return entity.id
