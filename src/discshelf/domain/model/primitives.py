"""Domain primitives: scalar aliases and name normalization.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

type CatalogNumber = str
type Barcode = str
type JsonData = dict[str, object] | list[object]


def normalize_name(value: str | None) -> str | None:
    """Trim and case-fold a free-text name; blank input yields ``None``."""

    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        return None
    return stripped.casefold()
