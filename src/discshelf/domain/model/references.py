"""Loosely-specified references to lookup rows: by id, by name, both, or none."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ById:
    id: int


@dataclass(frozen=True, slots=True)
class ByName:
    name: str


@dataclass(frozen=True, slots=True)
class ByIdOrName:
    """Try the id first; fall back to the name when the id is unknown."""

    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Absent:
    pass


ABSENT = Absent()

type Reference = ById | ByName | ByIdOrName | Absent


def reference_from(ref_id: int | None, name: str | None) -> Reference:
    """Build a reference from raw inputs.

    Ids ``<= 0`` count as missing (datasets use ``0`` for "none") and blank
    names are ignored.
    """

    cleaned = name.strip() if name else ""
    if ref_id is not None and ref_id > 0:
        return ByIdOrName(id=ref_id, name=cleaned) if cleaned else ById(id=ref_id)
    return ByName(name=cleaned) if cleaned else ABSENT
