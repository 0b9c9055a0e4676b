"""RoleMapping entity: one principal assigned to one role."""

from datetime import UTC, datetime

from gatehouse.domain.access.model.value import (
    PrincipalId,
    PrincipalType,
    RoleId,
    RoleMappingId,
)
from gatehouse.domain.shared.model.entity import Entity


class RoleMapping(Entity):
    """Association between a principal and a role.

    No uniqueness is enforced: the same (role, principal) pair may be
    recorded more than once, and membership counts include duplicates.
    """

    id: RoleMappingId
    role_id: RoleId
    principal_type: PrincipalType
    principal_id: PrincipalId
    created_at: datetime

    @classmethod
    def create(
        cls,
        role_id: RoleId,
        principal_type: PrincipalType,
        principal_id: PrincipalId,
    ) -> "RoleMapping":
        return cls(
            id=RoleMappingId.generate(),
            role_id=role_id,
            principal_type=principal_type,
            principal_id=principal_id,
            created_at=datetime.now(UTC),
        )
