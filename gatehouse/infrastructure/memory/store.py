"""In-memory record store, usable as a principal store or an ownership model store."""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from gatehouse.domain.access.adapter.role_principal_store import matches_where, project
from gatehouse.domain.access.model.value import PrincipalId, principal_key
from gatehouse.domain.access.port.principal_store import PrincipalQuery, PrincipalStore

T = TypeVar("T", bound=BaseModel)


class InMemoryRecordStore(PrincipalStore, Generic[T]):
    """Records of one pydantic model keyed by an auto-incremented integer id.

    The model must declare an optional ``id`` field.
    """

    def __init__(self, model: type[T]) -> None:
        self.model = model
        self._records: dict[str, T] = {}
        self._next_id = 1

    async def create(self, record: T | None = None, **attributes: Any) -> T:
        """Insert a record, assigning the next id when it has none."""
        if record is None:
            record = self.model(**attributes)

        record_id = getattr(record, "id", None)
        if record_id is None:
            record = record.model_copy(update={"id": self._next_id})
            self._next_id += 1
        elif isinstance(record_id, int):
            self._next_id = max(self._next_id, record_id + 1)

        self._records[principal_key(record.id)] = record  # type: ignore[attr-defined]
        return record

    async def get(self, principal_id: PrincipalId) -> T | None:
        return self._records.get(principal_key(principal_id))

    async def find_one(self, field: str, value: Any) -> T | None:
        if value is None:
            return None
        return next(
            (r for r in self._records.values() if getattr(r, field, None) == value),
            None,
        )

    async def find(
        self,
        query: PrincipalQuery | None = None,
        *,
        ids: Sequence[PrincipalId] | None = None,
    ) -> list[T]:
        records = list(self._records.values())
        if ids is not None:
            wanted = {principal_key(i) for i in ids}
            records = [r for r in records if principal_key(r.id) in wanted]  # type: ignore[attr-defined]

        records = [r for r in records if matches_where(r, query)]
        if query is not None and query.limit is not None:
            records = records[: query.limit]
        return [project(r, query) for r in records]

    def __len__(self) -> int:
        return len(self._records)
