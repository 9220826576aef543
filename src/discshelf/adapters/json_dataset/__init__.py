"""Public interface for the JSON dataset adapter."""

from __future__ import annotations

from .reader import LOOKUP_FILES, DatasetReadError, JsonDatasetReader
from .schema import LookupRowPayload, ReleaseRecordPayload
from .translator import parse_import_record, parse_loose_date

__all__ = [
    "LOOKUP_FILES",
    "DatasetReadError",
    "JsonDatasetReader",
    "LookupRowPayload",
    "ReleaseRecordPayload",
    "parse_import_record",
    "parse_loose_date",
]
