"""Translate Discogs payloads into release drafts."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date
from typing import Final

from discshelf.domain.model import ABSENT, ByName, ReleaseDraft

from .schema import CollectionReleasePayload

# Discogs appends " (2)", " (3)", ... to disambiguate artists sharing a name.
_DISAMBIGUATION_SUFFIX: Final = re.compile(r"\s+\(\d+\)$")
_NO_CATALOG_NUMBER: Final = "none"


def parse_collection_release(
    payload: CollectionReleasePayload | Mapping[str, object],
) -> ReleaseDraft:
    model = (
        payload
        if isinstance(payload, CollectionReleasePayload)
        else CollectionReleasePayload.model_validate(payload)
    )
    info = model.basic_information

    label = info.labels[0] if info.labels else None
    catalog_number = label.catno if label else None
    if catalog_number and catalog_number.lower() == _NO_CATALOG_NUMBER:
        catalog_number = None
    format_name = info.formats[0].name if info.formats else None

    return ReleaseDraft(
        title=info.title,
        discogs_id=info.id,
        label=ByName(name=label.name) if label else ABSENT,
        format=ByName(name=format_name) if format_name else ABSENT,
        artist_names=tuple(_artist_name(artist.name) for artist in info.artists),
        genre_names=tuple(info.genres),
        release_year=date(info.year, 1, 1) if info.year else None,
        catalog_number=catalog_number,
        date_added=model.date_added,
    )


def _artist_name(name: str) -> str:
    return _DISAMBIGUATION_SUFFIX.sub("", name.strip())
