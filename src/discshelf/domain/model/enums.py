"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class LookupKind(StrEnum):
    """Discriminator for the lookup tables a release references."""

    ARTIST = "artist"
    GENRE = "genre"
    LABEL = "label"
    COUNTRY = "country"
    FORMAT = "format"
    PACKAGING = "packaging"


class ImportRunState(StrEnum):
    NOT_STARTED = "not_started"
    READING = "reading"
    IMPORTING = "importing"
    COMMITTED = "committed"
    ABORTED = "aborted"
