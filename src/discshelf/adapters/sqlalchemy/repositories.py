"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, or_, select

from discshelf.adapters.sqlalchemy.mappings import lookup_table_for, release_table
from discshelf.domain.model import Release, normalize_name

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from sqlalchemy import ColumnElement, Select, Table
    from sqlalchemy.orm import Session

    from discshelf.domain.model import LookupEntity


class SqlAlchemyLookupRepository:
    """One lookup table; the concrete entity class selects the table."""

    def __init__(self, session: Session, entity_cls: type[LookupEntity]) -> None:
        self.session = session
        self._entity_cls = entity_cls
        self._table = lookup_table_for(entity_cls)

    def add(self, entity: LookupEntity) -> None:
        self.session.add(entity)

    def count(self) -> int:
        stmt = select(func.count()).select_from(self._table)
        return self.session.execute(stmt).scalar_one()

    def get(self, entity_id: int) -> LookupEntity | None:
        return self.session.get(self._entity_cls, entity_id)

    def get_many(self, entity_ids: Iterable[int]) -> list[LookupEntity]:
        wanted = list(dict.fromkeys(entity_ids))
        if not wanted:
            return []
        stmt = select(self._entity_cls).where(self._table.c.id.in_(wanted))
        found = {entity.id: entity for entity in self.session.execute(stmt).scalars()}
        return [found[entity_id] for entity_id in wanted if entity_id in found]

    def find_by_name(self, name: str, *, owner_id: UUID | None = None) -> LookupEntity | None:
        normalized = normalize_name(name)
        if normalized is None:
            return None
        stmt = (
            select(self._entity_cls)
            .where(self._table.c.name_key == normalized)
            .where(_visible_to(self._table.c.owner_id, owner_id))
            .order_by(self._table.c.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def sync_id_sequence(self) -> None:
        """Move the id sequence past rows inserted with explicit ids (PostgreSQL only)."""

        if self.session.get_bind().dialect.name != "postgresql":
            return
        self.session.execute(id_sequence_sync_statement(self._table))


class SqlAlchemyReleaseRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Release) -> None:
        self.session.add(entity)

    def count(self) -> int:
        stmt = select(func.count()).select_from(release_table)
        return self.session.execute(stmt).scalar_one()

    def get(self, release_id: int) -> Release | None:
        return self.session.get(Release, release_id)

    def get_by_external_id(self, external_id: int) -> Release | None:
        stmt = select(Release).where(release_table.c.external_id == external_id).limit(1)
        return self.session.execute(stmt).scalars().first()

    def exists_by_external_id(self, external_id: int) -> bool:
        stmt = select(release_table.c.id).where(release_table.c.external_id == external_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def exists_by_discogs_id(self, discogs_id: int, *, owner_id: UUID | None = None) -> bool:
        stmt = select(release_table.c.id).where(release_table.c.discogs_id == discogs_id)
        if owner_id is not None:
            stmt = stmt.where(release_table.c.owner_id == owner_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def find_by_catalog_number(
        self, catalog_number: str, *, owner_id: UUID | None = None
    ) -> list[Release]:
        normalized = normalize_name(catalog_number)
        if normalized is None:
            return []
        stmt = select(Release).where(release_table.c.catalog_number_key == normalized)
        return self._scoped(stmt, owner_id)

    def find_by_title(self, title: str, *, owner_id: UUID | None = None) -> list[Release]:
        normalized = normalize_name(title)
        if normalized is None:
            return []
        stmt = select(Release).where(release_table.c.title_key == normalized)
        return self._scoped(stmt, owner_id)

    def _scoped(self, stmt: Select[tuple[Release]], owner_id: UUID | None) -> list[Release]:
        if owner_id is not None:
            stmt = stmt.where(release_table.c.owner_id == owner_id)
        return list(self.session.execute(stmt.order_by(release_table.c.id)).scalars())


def id_sequence_sync_statement(table: Table) -> Select[tuple[int]]:
    sequence = func.pg_get_serial_sequence(table.name, "id")
    return select(func.setval(sequence, func.coalesce(func.max(table.c.id), 1)))


def _visible_to(column: ColumnElement[UUID | None], owner_id: UUID | None) -> ColumnElement[bool]:
    if owner_id is None:
        return column.is_(None)
    return or_(column == owner_id, column.is_(None))
