"""Role registry service: role definitions and principal assignments."""

import logging
from typing import Any

import logfire

from gatehouse.domain.access.model.role import Role, duplicate_role_name
from gatehouse.domain.access.model.role_mapping import RoleMapping
from gatehouse.domain.access.model.value import (
    PrincipalId,
    PrincipalType,
    RoleId,
    principal_key,
)
from gatehouse.domain.access.port.principal_store import PrincipalQuery, PrincipalStores
from gatehouse.domain.access.port.repository import (
    RoleFilter,
    RoleMappingFilter,
    RoleMappingRepository,
    RoleRepository,
)
from gatehouse.domain.shared.error import ValidationError
from gatehouse.domain.shared.service import Service

logger = logging.getLogger(__name__)


def _role_id(role: Role | RoleId) -> RoleId:
    return role.id if isinstance(role, Role) else role


def _principal_id(value: Any) -> PrincipalId:
    # Id value objects (e.g. a RoleId used as a principal) are stored by their raw value.
    return getattr(value, "root", value)


class RoleService(Service):
    """Manages role definitions and who is assigned to them."""

    _role_repo: RoleRepository
    _mapping_repo: RoleMappingRepository
    _stores: PrincipalStores

    async def create(self, name: str, description: str | None = None) -> Role:
        """Create a role. Raises ValidationError if the name is blank or taken."""
        role = Role.create(name=name, description=description)
        if await self._role_repo.get_by_name(name) is not None:
            raise duplicate_role_name(name)

        await self._role_repo.save(role)
        logfire.info("Role created", role_id=str(role.id), name=role.name)
        return role

    async def get(self, role_id: RoleId) -> Role | None:
        return await self._role_repo.get(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        return await self._role_repo.get_by_name(name)

    async def find(self, role_filter: RoleFilter | None = None) -> list[Role]:
        return await self._role_repo.find(role_filter)

    async def assign(
        self,
        role: Role | RoleId,
        principal_type: PrincipalType | str,
        principal_id: Any,
    ) -> RoleMapping:
        """Record `principal` as a member of `role`. Duplicates are not rejected."""
        if principal_id is None:
            raise ValidationError(
                "Principal id is required", field="principal_id", codes=["presence"]
            )
        try:
            principal_type = PrincipalType(principal_type)
        except ValueError:
            raise ValidationError(
                f"Unknown principal type {principal_type!r}",
                field="principal_type",
                codes=["inclusion"],
            ) from None

        mapping = RoleMapping.create(
            role_id=_role_id(role),
            principal_type=principal_type,
            principal_id=_principal_id(principal_id),
        )
        await self._mapping_repo.save(mapping)
        logger.info(
            "Assigned %s %s to role %s",
            principal_type,
            principal_key(principal_id),
            mapping.role_id,
        )
        return mapping

    async def unassign(
        self,
        role: Role | RoleId,
        principal_type: PrincipalType,
        principal_id: Any,
    ) -> int:
        """Remove every mapping of the principal to `role`. Returns rows removed."""
        removed = await self._mapping_repo.delete(
            RoleMappingFilter(
                role_id=_role_id(role),
                principal_type=principal_type,
                principal_id=_principal_id(principal_id),
            )
        )
        logger.info(
            "Unassigned %s %s from role %s (%d mappings)",
            principal_type,
            principal_key(principal_id),
            _role_id(role),
            removed,
        )
        return removed

    async def principals(self, role: Role | RoleId) -> list[RoleMapping]:
        """Every mapping that names `role`."""
        return await self._mapping_repo.find(RoleMappingFilter(role_id=_role_id(role)))

    async def list_by_principal_type(
        self,
        role: Role | RoleId,
        principal_type: PrincipalType,
        query: PrincipalQuery | None = None,
    ) -> list[Any]:
        """Principal records of `principal_type` assigned to `role`.

        `query` is passed through unchanged to the principal store.
        """
        mappings = await self._mapping_repo.find(
            RoleMappingFilter(role_id=_role_id(role), principal_type=principal_type)
        )
        ids = list(dict.fromkeys(m.principal_id for m in mappings))
        if not ids:
            return []
        return await self._stores.get(principal_type).find(query, ids=ids)

    async def users(self, role: Role | RoleId, query: PrincipalQuery | None = None) -> list[Any]:
        return await self.list_by_principal_type(role, PrincipalType.USER, query)

    async def applications(
        self, role: Role | RoleId, query: PrincipalQuery | None = None
    ) -> list[Any]:
        return await self.list_by_principal_type(role, PrincipalType.APPLICATION, query)

    async def roles(self, role: Role | RoleId, query: PrincipalQuery | None = None) -> list[Any]:
        return await self.list_by_principal_type(role, PrincipalType.ROLE, query)

    async def roles_for(self, principal_type: PrincipalType, principal_id: Any) -> list[Role]:
        """Roles the principal is directly assigned to, ordered by name."""
        mappings = await self._mapping_repo.find(
            RoleMappingFilter(
                principal_type=principal_type,
                principal_id=_principal_id(principal_id),
            )
        )
        if not mappings:
            return []
        role_ids = tuple(dict.fromkeys(m.role_id for m in mappings))
        return await self._role_repo.find(RoleFilter(ids=role_ids))
