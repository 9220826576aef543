"""SQLAlchemy mapping metadata for the discshelf domain model."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, Final, cast

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Dialect,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    event,
    orm,
)
from sqlalchemy.orm import configure_mappers

from discshelf.domain.model import (
    LOOKUP_CLASS_BY_KIND,
    LookupEntity,
    LookupKind,
    Release,
    normalize_name,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine
    from sqlalchemy.orm import Mapper

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class IdListType(TypeDecorator[list[int]]):
    """Ordered integer ids stored as a JSON array string; empty lists are stored as NULL."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: list[int] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if not value:
            return None
        return json.dumps([int(item) for item in value])

    def process_result_value(self, value: str | None, dialect: Dialect) -> list[int]:
        _ = dialect
        if value is None:
            return []
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return []
        items = cast(list[Any], loaded)
        return [item for item in items if isinstance(item, int)]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Lookup tables ---------------------------------------------------------------

LOOKUP_TABLE_NAMES: Final[dict[LookupKind, str]] = {
    LookupKind.ARTIST: "artist",
    LookupKind.GENRE: "genre",
    LookupKind.LABEL: "label",
    LookupKind.COUNTRY: "country",
    LookupKind.FORMAT: "format",
    LookupKind.PACKAGING: "packaging",
}


def _lookup_table(kind: LookupKind) -> Table:
    name = LOOKUP_TABLE_NAMES[kind]
    table = Table(
        name,
        mapper_registry.metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", String(255), nullable=False),
        # Trimmed, casefolded copy of name maintained by mapper events.
        Column("name_key", String(255), nullable=True),
        Column("owner_id", UUIDColumnType, nullable=True),
    )
    Index(f"ix_{name}_name_key_owner", table.c.name_key, table.c.owner_id)
    return table


LOOKUP_TABLES: Final[dict[LookupKind, Table]] = {
    kind: _lookup_table(kind) for kind in LOOKUP_TABLE_NAMES
}

# Release ---------------------------------------------------------------------

release_table = Table(
    "release",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("external_id", Integer, nullable=True, unique=True),
    Column("discogs_id", Integer, nullable=True, index=True),
    Column("title", String(300), nullable=False),
    Column("title_key", String(300), nullable=True, index=True),
    Column("release_year", Date, nullable=True),
    Column("original_release_year", Date, nullable=True),
    Column("catalog_number", String(100), nullable=True),
    Column("catalog_number_key", String(100), nullable=True, index=True),
    Column("upc", String(50), nullable=True),
    Column("live", Boolean, nullable=False, default=False),
    Column("length_seconds", Integer, nullable=True),
    # Lookup references are soft (no FK) so seeded ids from external datasets load in any order.
    Column("label_id", Integer, nullable=True),
    Column("country_id", Integer, nullable=True),
    Column("format_id", Integer, nullable=True),
    Column("packaging_id", Integer, nullable=True),
    Column("artist_ids", IdListType, nullable=True),
    Column("genre_ids", IdListType, nullable=True),
    Column("links", JSON, nullable=True),
    Column("media", JSON, nullable=True),
    Column("owner_id", UUIDColumnType, nullable=True, index=True),
    Column("date_added", UTCDateTime, nullable=True),
    Column("last_modified", UTCDateTime, nullable=True),
)


def _fill_lookup_keys(mapper: Mapper[Any], connection: Connection, target: LookupEntity) -> None:
    _ = (mapper, connection)
    target.name_key = normalize_name(target.name)  # pyright: ignore[reportAttributeAccessIssue]


def _fill_release_keys(mapper: Mapper[Any], connection: Connection, target: Release) -> None:
    _ = (mapper, connection)
    target.title_key = normalize_name(target.title)  # pyright: ignore[reportAttributeAccessIssue]
    target.catalog_number_key = normalize_name(  # pyright: ignore[reportAttributeAccessIssue]
        target.catalog_number
    )


@cache
def start_mappers() -> orm.registry:
    """Configure imperative mappings between domain entities and tables.

    Key columns (``name_key``, ``title_key``, ``catalog_number_key``) are
    computed in Python on every insert and update, so case-insensitive lookups
    compare casefolded text on every backend, not only ASCII letters.
    """

    for kind, table in LOOKUP_TABLES.items():
        entity_cls = LOOKUP_CLASS_BY_KIND[kind]
        mapper_registry.map_imperatively(entity_cls, table)
        event.listen(entity_cls, "before_insert", _fill_lookup_keys)
        event.listen(entity_cls, "before_update", _fill_lookup_keys)

    mapper_registry.map_imperatively(Release, release_table)
    event.listen(Release, "before_insert", _fill_release_keys)
    event.listen(Release, "before_update", _fill_release_keys)

    configure_mappers()
    return mapper_registry


def lookup_table_for(entity_cls: type[LookupEntity]) -> Table:
    return LOOKUP_TABLES[entity_cls.KIND]


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
