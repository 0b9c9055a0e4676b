"""In-memory role and role-mapping repositories."""

from gatehouse.domain.access.model.role import Role, duplicate_role_name
from gatehouse.domain.access.model.role_mapping import RoleMapping
from gatehouse.domain.access.model.value import RoleId, same_principal_id
from gatehouse.domain.access.port.repository import (
    RoleFilter,
    RoleMappingFilter,
    RoleMappingRepository,
    RoleRepository,
)


class InMemoryRoleRepository(RoleRepository):
    """Role repository backed by a dict. Enforces name uniqueness on save."""

    def __init__(self, roles: list[Role] | None = None) -> None:
        self._roles: dict[RoleId, Role] = {r.id: r for r in roles or []}

    async def save(self, role: Role) -> None:
        for existing in self._roles.values():
            if existing.name == role.name and existing.id != role.id:
                raise duplicate_role_name(role.name)
        self._roles[role.id] = role

    async def get(self, role_id: RoleId) -> Role | None:
        return self._roles.get(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        return next((r for r in self._roles.values() if r.name == name), None)

    async def find(self, role_filter: RoleFilter | None = None) -> list[Role]:
        role_filter = role_filter or RoleFilter()
        roles = sorted(self._roles.values(), key=lambda r: r.name)

        if role_filter.name is not None:
            roles = [r for r in roles if r.name == role_filter.name]
        if role_filter.ids is not None:
            wanted = set(role_filter.ids)
            roles = [r for r in roles if r.id in wanted]

        roles = roles[role_filter.offset :]
        if role_filter.limit is not None:
            roles = roles[: role_filter.limit]
        return roles


def _matches(mapping: RoleMapping, mapping_filter: RoleMappingFilter) -> bool:
    if mapping_filter.role_id is not None and mapping.role_id != mapping_filter.role_id:
        return False
    if (
        mapping_filter.principal_type is not None
        and mapping.principal_type != mapping_filter.principal_type
    ):
        return False
    if mapping_filter.principal_id is not None and not same_principal_id(
        mapping.principal_id, mapping_filter.principal_id
    ):
        return False
    return True


class InMemoryRoleMappingRepository(RoleMappingRepository):
    """Append-only list of mappings, in insertion order."""

    def __init__(self) -> None:
        self._mappings: list[RoleMapping] = []

    async def save(self, mapping: RoleMapping) -> None:
        self._mappings.append(mapping)

    async def find(self, mapping_filter: RoleMappingFilter) -> list[RoleMapping]:
        return [m for m in self._mappings if _matches(m, mapping_filter)]

    async def delete(self, mapping_filter: RoleMappingFilter) -> int:
        kept = [m for m in self._mappings if not _matches(m, mapping_filter)]
        removed = len(self._mappings) - len(kept)
        self._mappings = kept
        return removed
