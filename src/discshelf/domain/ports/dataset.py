"""Port for reading bulk import datasets."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from discshelf.domain.model import ImportRecord, LookupKind


@runtime_checkable
class DatasetReader(Protocol):
    """Reads release records and lookup seed rows from a dataset location.

    A missing dataset is not an error: ``read_records`` returns ``None`` and
    ``count`` returns ``0``. Unreadable or malformed data raises.
    """

    def exists(self, path: Path) -> bool: ...

    def read_records(self, path: Path) -> list[ImportRecord] | None: ...

    def count(self, path: Path) -> int: ...

    def read_lookup_rows(self, path: Path, kind: LookupKind) -> list[tuple[int, str]] | None: ...
