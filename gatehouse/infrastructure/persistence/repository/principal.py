"""SQLAlchemy principal stores for users and applications."""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import Column, Integer, Table, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.domain.access.model.value import PrincipalId, principal_key
from gatehouse.domain.access.port.principal_store import PrincipalQuery, PrincipalStore
from gatehouse.domain.shared.error import ValidationError

T = TypeVar("T", bound=BaseModel)


class _NoMatch:
    """Marker for a lookup value the column type can never hold."""


NO_MATCH = _NoMatch()


def bind_value(column: Column, value: Any) -> Any:
    """Coerce `value` to the column's type, or NO_MATCH if impossible.

    Keeps lookups such as ``users.id == "john"`` from reaching databases
    that reject mismatched comparisons.
    """
    if isinstance(column.type, Integer):
        try:
            return int(principal_key(value))
        except ValueError:
            return NO_MATCH
    return principal_key(value)


def primary_key_column(table: Table) -> Column:
    return next(iter(table.primary_key.columns))


def _column(table: Table, name: str) -> Column:
    if name not in table.c:
        raise ValidationError(
            f"Unknown field {name!r} for {table.name}",
            field=name,
            codes=["unknown_field"],
        )
    return table.c[name]


class SQLAlchemyPrincipalStore(PrincipalStore, Generic[T]):
    """PrincipalStore over one table whose rows map onto pydantic model `T`."""

    def __init__(self, session: AsyncSession, table: Table, model: type[T]) -> None:
        self.session = session
        self.table = table
        self.model = model
        self._pk = primary_key_column(table)

    async def create(self, record: T | None = None, **attributes: Any) -> T:
        """Insert a record and return it with its generated id."""
        if record is None:
            record = self.model(**attributes)
        values = record.model_dump(exclude_none=True)
        result = await self.session.execute(insert(self.table).values(**values))
        await self.session.flush()
        return record.model_copy(update={self._pk.name: result.inserted_primary_key[0]})

    async def get(self, principal_id: PrincipalId) -> T | None:
        key = bind_value(self._pk, principal_id)
        if key is NO_MATCH:
            return None
        return await self._first(self._pk, key)

    async def find_one(self, field: str, value: Any) -> T | None:
        if value is None or field not in self.table.c:
            return None
        column = self.table.c[field]
        key = bind_value(column, value)
        if key is NO_MATCH:
            return None
        return await self._first(column, key)

    async def find(
        self,
        query: PrincipalQuery | None = None,
        *,
        ids: Sequence[PrincipalId] | None = None,
    ) -> list[T]:
        query = query or PrincipalQuery()

        if query.fields is None:
            columns = list(self.table.columns)
        else:
            names = dict.fromkeys([self._pk.name, *query.fields])
            columns = [_column(self.table, name) for name in names]

        stmt = select(*columns).order_by(self._pk)
        if ids is not None:
            keys = [bind_value(self._pk, i) for i in ids]
            stmt = stmt.where(self._pk.in_([k for k in keys if k is not NO_MATCH]))
        for name, value in (query.where or {}).items():
            column = _column(self.table, name)
            stmt = stmt.where(column == bind_value(column, value))
        if query.limit is not None:
            stmt = stmt.limit(query.limit)

        result = await self.session.execute(stmt)
        return [self.model(**dict(row)) for row in result.mappings().all()]

    async def _first(self, column: Column, value: Any) -> T | None:
        stmt = select(self.table).where(column == value).limit(1)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return self.model(**dict(row)) if row else None
