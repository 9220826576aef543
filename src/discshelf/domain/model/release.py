"""Release aggregate and the drafts used to create or import releases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from discshelf.domain.model.references import ABSENT, Reference

if TYPE_CHECKING:
    from datetime import date, datetime
    from uuid import UUID

    from discshelf.domain.model.primitives import Barcode, CatalogNumber, JsonData


@dataclass(eq=False, kw_only=True)
class Release:
    """A catalog entry. Lookup references are stored by id only."""

    title: str
    id: int | None = None
    external_id: int | None = None
    discogs_id: int | None = None
    release_year: date | None = None
    original_release_year: date | None = None
    catalog_number: CatalogNumber | None = None
    upc: Barcode | None = None
    live: bool = False
    length_seconds: int | None = None
    label_id: int | None = None
    country_id: int | None = None
    format_id: int | None = None
    packaging_id: int | None = None
    artist_ids: list[int] = field(default_factory=list[int])
    genre_ids: list[int] = field(default_factory=list[int])
    links: JsonData | None = None
    media: JsonData | None = None
    owner_id: UUID | None = None
    date_added: datetime | None = None
    last_modified: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ReleaseDraft:
    """Unresolved release input: references may still be names rather than ids."""

    title: str
    external_id: int | None = None
    discogs_id: int | None = None
    label: Reference = ABSENT
    country: Reference = ABSENT
    format: Reference = ABSENT
    packaging: Reference = ABSENT
    artist_ids: tuple[int, ...] = ()
    artist_names: tuple[str, ...] = ()
    genre_ids: tuple[int, ...] = ()
    genre_names: tuple[str, ...] = ()
    release_year: date | None = None
    original_release_year: date | None = None
    catalog_number: CatalogNumber | None = None
    upc: Barcode | None = None
    live: bool = False
    length_seconds: int | None = None
    links: JsonData | None = None
    media: JsonData | None = None
    date_added: datetime | None = None
    last_modified: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ImportRecord(ReleaseDraft):
    """A release read from a bulk dataset; ``external_id`` is mandatory."""

    external_id: int  # pyright: ignore[reportIncompatibleVariableOverride]
