"""Roles viewed as principals (a role can be a member of another role)."""

from collections.abc import Sequence
from typing import Any

from gatehouse.domain.access.model.role import Role
from gatehouse.domain.access.model.value import PrincipalId, RoleId, same_principal_id
from gatehouse.domain.access.port.principal_store import PrincipalQuery, PrincipalStore
from gatehouse.domain.access.port.repository import RoleFilter, RoleRepository


def project(record: Any, query: PrincipalQuery | None) -> Any:
    """Apply a query's field projection to a pydantic record (id is always kept)."""
    if query is None or query.fields is None:
        return record
    keep = set(query.fields) | {"id"}
    return record.model_copy(
        update={name: None for name in type(record).model_fields if name not in keep}
    )


def matches_where(record: Any, query: PrincipalQuery | None) -> bool:
    if query is None or not query.where:
        return True
    for name, expected in query.where.items():
        actual = getattr(record, name, None)
        if name == "id" or name.endswith("_id"):
            if not same_principal_id(actual, expected):
                return False
        elif actual != expected:
            return False
    return True


class RolePrincipalStore(PrincipalStore):
    """PrincipalStore over the role repository, keyed by role id."""

    def __init__(self, role_repo: RoleRepository) -> None:
        self._roles = role_repo

    async def get(self, principal_id: PrincipalId) -> Role | None:
        role_id = RoleId.parse(principal_id)
        return await self._roles.get(role_id) if role_id is not None else None

    async def find_one(self, field: str, value: Any) -> Role | None:
        if field == "name":
            return await self._roles.get_by_name(str(value))
        for role in await self._roles.find():
            if getattr(role, field, None) == value:
                return role
        return None

    async def find(
        self,
        query: PrincipalQuery | None = None,
        *,
        ids: Sequence[PrincipalId] | None = None,
    ) -> list[Role]:
        role_filter = None
        if ids is not None:
            parsed = (RoleId.parse(i) for i in ids)
            role_filter = RoleFilter(ids=tuple(r for r in parsed if r is not None))

        roles = [r for r in await self._roles.find(role_filter) if matches_where(r, query)]
        if query is not None and query.limit is not None:
            roles = roles[: query.limit]
        return [project(r, query) for r in roles]
