"""Public domain model surface."""

from __future__ import annotations

from discshelf.domain.model.enums import ImportRunState, LookupKind
from discshelf.domain.model.lookups import (
    LOOKUP_CLASS_BY_KIND,
    Artist,
    Country,
    CreatedEntities,
    Format,
    Genre,
    Label,
    LookupEntity,
    Packaging,
    new_lookup,
)
from discshelf.domain.model.primitives import Barcode, CatalogNumber, JsonData, normalize_name
from discshelf.domain.model.references import (
    ABSENT,
    Absent,
    ById,
    ByIdOrName,
    ByName,
    Reference,
    reference_from,
)
from discshelf.domain.model.release import ImportRecord, Release, ReleaseDraft

__all__ = [
    "ABSENT",
    "LOOKUP_CLASS_BY_KIND",
    "Absent",
    "Artist",
    "Barcode",
    "ById",
    "ByIdOrName",
    "ByName",
    "CatalogNumber",
    "Country",
    "CreatedEntities",
    "Format",
    "Genre",
    "ImportRecord",
    "ImportRunState",
    "JsonData",
    "Label",
    "LookupEntity",
    "LookupKind",
    "Packaging",
    "Reference",
    "Release",
    "ReleaseDraft",
    "new_lookup",
    "normalize_name",
    "reference_from",
]
