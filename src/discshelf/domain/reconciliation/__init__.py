"""Catalog reconciliation: reference resolution, duplicate detection and batch import."""

from __future__ import annotations

from .batch import (
    DEFAULT_IMPORT_CHUNK_SIZE,
    BatchProcessor,
    Failed,
    Imported,
    LookupValidation,
    RecordOutcome,
    Skipped,
    count_imported,
    has_upc,
)
from .duplicates import DuplicateDetector
from .orchestrator import ImportAbortedError, ImportOrchestrator, ImportProgress
from .resolver import EntityResolver

__all__ = [
    "DEFAULT_IMPORT_CHUNK_SIZE",
    "BatchProcessor",
    "DuplicateDetector",
    "EntityResolver",
    "Failed",
    "ImportAbortedError",
    "ImportOrchestrator",
    "ImportProgress",
    "Imported",
    "LookupValidation",
    "RecordOutcome",
    "Skipped",
    "count_imported",
    "has_upc",
]
