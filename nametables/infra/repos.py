from __future__ import annotations

from typing import Any, List, Optional, Tuple, Union

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.errors import UnknownLocaleError
from ..core.tables import NameTable, SharedRef, TableKind, Value, ZoneNames
from .models import NameEntryRow, NameTableRow, SharedValueRow


def _plain(value: Value) -> Any:
    return list(value) if isinstance(value, ZoneNames) else value


def _value(stored: Any) -> Value:
    return ZoneNames(*stored) if isinstance(stored, list) else stored


class TablesRepo:
    def __init__(self, session: AsyncSession) -> None:
        self.s = session

    async def _row(self, kind: TableKind, locale: str) -> Optional[NameTableRow]:
        q = (
            select(NameTableRow)
            .where(NameTableRow.kind == kind.value, NameTableRow.locale == locale)
            .options(selectinload(NameTableRow.entries), selectinload(NameTableRow.shared_values))
        )
        return (await self.s.execute(q)).scalars().first()

    async def save(self, table: NameTable) -> NameTableRow:
        """Store ``table``, replacing any earlier copy of the same kind and locale."""
        existing = await self._row(table.kind, table.locale)
        if existing is not None:
            await self.s.delete(existing)
            await self.s.flush()

        row = NameTableRow(
            kind=table.kind.value,
            locale=table.locale,
            shared_values=[
                SharedValueRow(position=i, name=name, value=_plain(value), ref=table.alias_of(name))
                for i, (name, value) in enumerate(table.shared.items())
            ],
            entries=[
                NameEntryRow(position=i, key=key, value=_plain(value), ref=table.ref_of(key))
                for i, (key, value) in enumerate(table.items())
            ],
        )
        self.s.add(row)
        await self.s.flush()
        return row

    async def load(self, kind: Union[str, TableKind], locale: str) -> NameTable:
        kind = TableKind.parse(kind)
        row = await self._row(kind, locale)
        if row is None:
            raise UnknownLocaleError(locale, kind.value)
        shared = {sv.name: SharedRef(sv.ref) if sv.ref else sv.value for sv in row.shared_values}
        pairs = [(e.key, SharedRef(e.ref) if e.ref else e.value) for e in row.entries]
        return NameTable.build(kind, locale, pairs, shared=shared)

    async def lookup(self, kind: Union[str, TableKind], locale: str, key: str) -> Optional[Value]:
        kind = TableKind.parse(kind)
        q = (
            select(NameEntryRow.value)
            .join(NameTableRow, NameEntryRow.table_id == NameTableRow.id)
            .where(NameTableRow.kind == kind.value, NameTableRow.locale == locale, NameEntryRow.key == key)
        )
        stored = (await self.s.execute(q)).scalars().first()
        return None if stored is None else _value(stored)

    async def list_tables(self) -> List[Tuple[TableKind, str, int]]:
        q = (
            select(NameTableRow.kind, NameTableRow.locale, func.count(NameEntryRow.id))
            .outerjoin(NameEntryRow, NameEntryRow.table_id == NameTableRow.id)
            .group_by(NameTableRow.id)
            .order_by(NameTableRow.kind, NameTableRow.locale)
        )
        rows = (await self.s.execute(q)).all()
        return [(TableKind.parse(kind), locale, int(count)) for kind, locale, count in rows]

    async def delete(self, kind: Union[str, TableKind], locale: str) -> bool:
        row = await self._row(TableKind.parse(kind), locale)
        if row is None:
            return False
        await self.s.delete(row)
        return True
