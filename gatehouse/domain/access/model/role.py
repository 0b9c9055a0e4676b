"""Role entity: a named authorization grouping."""

from datetime import UTC, datetime

from gatehouse.domain.access.model.value import RoleId
from gatehouse.domain.shared.error import ValidationError
from gatehouse.domain.shared.model.entity import Entity


class Role(Entity):
    """A named role that principals can be assigned to.

    Invariants:
    - `name` is unique across all roles and never blank
    - `id` and `name` are immutable after creation
    """

    id: RoleId
    name: str
    description: str | None = None
    created_at: datetime

    @classmethod
    def create(cls, name: str, description: str | None = None) -> "Role":
        """Create a new role with a generated id."""
        if not name or not name.strip():
            raise ValidationError("Role name is required", field="name", codes=["presence"])
        return cls(
            id=RoleId.generate(),
            name=name,
            description=description,
            created_at=datetime.now(UTC),
        )


def duplicate_role_name(name: str) -> ValidationError:
    """Error raised when a role name is already taken."""
    return ValidationError(
        f"Role name {name!r} is already taken",
        field="name",
        codes=["uniqueness"],
    )
