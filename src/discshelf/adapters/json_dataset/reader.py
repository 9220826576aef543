"""Read release and lookup datasets from JSON files on disk."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import TypeAdapter, ValidationError

from discshelf.domain.model import LookupKind

from .schema import LookupRowPayload, ReleaseRecordPayload
from .translator import parse_import_record

if TYPE_CHECKING:
    from pathlib import Path

    from discshelf.domain.model import ImportRecord
    from discshelf.domain.ports.dataset import DatasetReader

log = getLogger(__name__)

# (file name, container key) per lookup kind; "countrys" is the dataset's own spelling.
LOOKUP_FILES: Final[dict[LookupKind, tuple[str, str]]] = {
    LookupKind.COUNTRY: ("countrys.json", "Countrys"),
    LookupKind.FORMAT: ("formats.json", "Formats"),
    LookupKind.GENRE: ("genres.json", "Genres"),
    LookupKind.LABEL: ("labels.json", "Labels"),
    LookupKind.ARTIST: ("artists.json", "Artists"),
    LookupKind.PACKAGING: ("packagings.json", "Packagings"),
}

_RELEASES_ADAPTER = TypeAdapter(list[ReleaseRecordPayload])
_LOOKUP_ROWS_ADAPTER = TypeAdapter(list[LookupRowPayload])


class DatasetReadError(RuntimeError):
    """Raised when a dataset file exists but cannot be read or parsed."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class JsonDatasetReader:
    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read_records(self, path: Path) -> list[ImportRecord] | None:
        payload = self._load(path)
        if payload is None:
            return None
        try:
            models = _RELEASES_ADAPTER.validate_python(payload)
        except ValidationError as exc:
            log.exception(f"Invalid release dataset: {path}")
            raise DatasetReadError(f"Invalid release dataset {path}: {exc}", path=path) from exc
        log.debug(f"Read {len(models)} release records from {path}")
        return [parse_import_record(model) for model in models]

    def count(self, path: Path) -> int:
        payload = self._load(path)
        if payload is None:
            return 0
        if not isinstance(payload, list):
            raise DatasetReadError(f"Expected a JSON array in {path}", path=path)
        return len(payload)  # pyright: ignore[reportUnknownArgumentType]

    def read_lookup_rows(self, path: Path, kind: LookupKind) -> list[tuple[int, str]] | None:
        """Read ``{Id, Name}`` rows for ``kind`` from the dataset directory ``path``."""

        filename, container_key = LOOKUP_FILES[kind]
        file_path = path / filename
        payload = self._load(file_path)
        if payload is None:
            return None
        if isinstance(payload, dict):
            payload = payload.get(container_key)  # pyright: ignore[reportUnknownMemberType]
        if payload is None:
            return None
        try:
            rows = _LOOKUP_ROWS_ADAPTER.validate_python(payload)
        except ValidationError as exc:
            msg = f"Invalid {kind} dataset {file_path}: {exc}"
            raise DatasetReadError(msg, path=file_path) from exc
        return [(row.id, row.name.strip()) for row in rows if row.name.strip()]

    def _load(self, path: Path) -> object | None:
        if not path.is_file():
            log.warning(f"JSON file not found at: {path}")
            return None
        try:
            content = path.read_text(encoding="utf-8-sig")
        except OSError as exc:
            log.exception(f"Error reading JSON file: {path}")
            raise DatasetReadError(f"Could not read {path}: {exc}", path=path) from exc
        if not content.strip():
            log.warning(f"JSON file is empty: {path}")
            return None
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            log.exception(f"JSON deserialization error for file: {path}")
            raise DatasetReadError(f"Malformed JSON in {path}: {exc}", path=path) from exc


if TYPE_CHECKING:
    _reader_check: DatasetReader = JsonDatasetReader()
