"""Translate dataset payloads into domain import records."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from discshelf.domain.model import ImportRecord, reference_from

from .schema import ReleaseRecordPayload

if TYPE_CHECKING:
    from collections.abc import Mapping


def parse_import_record(payload: ReleaseRecordPayload | Mapping[str, object]) -> ImportRecord:
    model = (
        payload
        if isinstance(payload, ReleaseRecordPayload)
        else ReleaseRecordPayload.model_validate(payload)
    )
    return ImportRecord(
        external_id=model.id,
        title=model.title,
        label=reference_from(model.label_id, model.label_name),
        country=reference_from(model.country_id, model.country_name),
        format=reference_from(model.format_id, model.format_name),
        packaging=reference_from(model.packaging_id, model.packaging_name),
        artist_ids=tuple(model.artists),
        artist_names=tuple(model.artist_names),
        genre_ids=tuple(model.genres),
        genre_names=tuple(model.genre_names),
        release_year=parse_loose_date(model.release_year),
        original_release_year=parse_loose_date(model.orig_release_year),
        catalog_number=_blank_to_none(model.label_number),
        upc=model.upc,
        live=model.live,
        length_seconds=_parse_int(model.length_in_seconds),
        links=list(model.links) if model.links else None,
        media=list(model.media) if model.media else None,
        date_added=model.date_added,
        last_modified=model.last_modified,
    )


def parse_loose_date(value: str | None) -> date | None:
    """Parse ``YYYY``, ``YYYY-MM``, ``YYYY-MM-DD`` or an ISO timestamp; otherwise ``None``."""

    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    parts = text.split("-")
    try:
        year = int(parts[0])
        month = int(parts[1]) if len(parts) > 1 else 1
        return date(year, month, 1)
    except (ValueError, IndexError):
        return None


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
