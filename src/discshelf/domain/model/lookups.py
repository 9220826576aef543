"""Lookup entities referenced by releases, plus the created-entities accumulator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from discshelf.domain.model.enums import LookupKind

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class LookupEntity:
    """A named catalog row; ``owner_id=None`` marks shared seed data."""

    KIND: ClassVar[LookupKind]

    name: str
    id: int | None = None
    owner_id: UUID | None = None

    @property
    def kind(self) -> LookupKind:
        return self.KIND


class Artist(LookupEntity):
    KIND: ClassVar[LookupKind] = LookupKind.ARTIST


class Genre(LookupEntity):
    KIND: ClassVar[LookupKind] = LookupKind.GENRE


class Label(LookupEntity):
    KIND: ClassVar[LookupKind] = LookupKind.LABEL


class Country(LookupEntity):
    KIND: ClassVar[LookupKind] = LookupKind.COUNTRY


class Format(LookupEntity):
    KIND: ClassVar[LookupKind] = LookupKind.FORMAT


class Packaging(LookupEntity):
    KIND: ClassVar[LookupKind] = LookupKind.PACKAGING


LOOKUP_CLASS_BY_KIND: dict[LookupKind, type[LookupEntity]] = {
    cls.KIND: cls for cls in (Artist, Genre, Label, Country, Format, Packaging)
}


def new_lookup(kind: LookupKind, name: str, *, owner_id: UUID | None = None) -> LookupEntity:
    return LOOKUP_CLASS_BY_KIND[kind](name=name, owner_id=owner_id)


@dataclass(slots=True)
class CreatedEntities:
    """Lookup rows created during one operation, grouped by kind.

    Transient: the caller receives it back and may report on it. Nothing here is
    persisted beyond the rows themselves.
    """

    by_kind: dict[LookupKind, list[LookupEntity]] = field(
        default_factory=dict[LookupKind, list[LookupEntity]]
    )

    def add(self, entity: LookupEntity) -> None:
        self.by_kind.setdefault(entity.KIND, []).append(entity)

    def of_kind(self, kind: LookupKind) -> tuple[LookupEntity, ...]:
        return tuple(self.by_kind.get(kind, ()))

    def merge(self, other: CreatedEntities) -> None:
        for kind, entities in other.by_kind.items():
            self.by_kind.setdefault(kind, []).extend(entities)

    def counts(self) -> dict[LookupKind, int]:
        return {kind: len(entities) for kind, entities in self.by_kind.items() if entities}

    @property
    def artists(self) -> tuple[LookupEntity, ...]:
        return self.of_kind(LookupKind.ARTIST)

    @property
    def genres(self) -> tuple[LookupEntity, ...]:
        return self.of_kind(LookupKind.GENRE)

    @property
    def labels(self) -> tuple[LookupEntity, ...]:
        return self.of_kind(LookupKind.LABEL)

    @property
    def countries(self) -> tuple[LookupEntity, ...]:
        return self.of_kind(LookupKind.COUNTRY)

    @property
    def formats(self) -> tuple[LookupEntity, ...]:
        return self.of_kind(LookupKind.FORMAT)

    @property
    def packagings(self) -> tuple[LookupEntity, ...]:
        return self.of_kind(LookupKind.PACKAGING)

    def __len__(self) -> int:
        return sum(len(entities) for entities in self.by_kind.values())

    def __bool__(self) -> bool:
        return len(self) > 0
