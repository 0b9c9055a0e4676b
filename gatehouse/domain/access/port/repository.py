"""Repository ports for roles and role mappings."""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Protocol

from gatehouse.domain.access.model.role import Role
from gatehouse.domain.access.model.role_mapping import RoleMapping
from gatehouse.domain.access.model.value import PrincipalId, PrincipalType, RoleId
from gatehouse.domain.shared.port import Port


@dataclass(frozen=True)
class RoleFilter:
    """Criteria for listing roles. Unset fields do not constrain."""

    name: str | None = None
    ids: tuple[RoleId, ...] | None = None
    limit: int | None = None
    offset: int = 0


@dataclass(frozen=True)
class RoleMappingFilter:
    """Criteria for selecting role mappings.

    `principal_id` matches with loose equality (see `same_principal_id`).
    """

    role_id: RoleId | None = None
    principal_type: PrincipalType | None = None
    principal_id: PrincipalId | None = None


class RoleRepository(Port, Protocol):
    """Repository for Role persistence."""

    @abstractmethod
    async def save(self, role: Role) -> None:
        """Insert a role.

        Raises:
            ValidationError: If another role already uses the same name.
        """
        ...

    @abstractmethod
    async def get(self, role_id: RoleId) -> Role | None:
        """Get a role by ID."""
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Role | None:
        """Get a role by its unique name."""
        ...

    @abstractmethod
    async def find(self, role_filter: RoleFilter | None = None) -> list[Role]:
        """List roles ordered by name."""
        ...


class RoleMappingRepository(Port, Protocol):
    """Repository for RoleMapping persistence. Carries no business rules."""

    @abstractmethod
    async def save(self, mapping: RoleMapping) -> None:
        """Insert a mapping. Duplicates are allowed."""
        ...

    @abstractmethod
    async def find(self, mapping_filter: RoleMappingFilter) -> list[RoleMapping]:
        """List mappings matching the filter, duplicates included."""
        ...

    @abstractmethod
    async def delete(self, mapping_filter: RoleMappingFilter) -> int:
        """Delete matching mappings. Returns the number of rows removed."""
        ...
