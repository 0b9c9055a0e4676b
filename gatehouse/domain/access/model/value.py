"""Value objects for the access domain."""

from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from pydantic import RootModel


class PrincipalType(StrEnum):
    """Kinds of principal that can hold a role.

    Closed set: every per-type lookup (principal stores, typed role views,
    ownership foreign keys) is keyed by one of these members.
    """

    USER = "USER"
    APPLICATION = "APPLICATION"
    ROLE = "ROLE"


USER = PrincipalType.USER
APPLICATION = PrincipalType.APPLICATION
APP = PrincipalType.APPLICATION
ROLE = PrincipalType.ROLE

DEFAULT_ALTERNATE_KEYS: dict[PrincipalType, tuple[str, ...]] = {
    PrincipalType.USER: ("username", "email"),
    PrincipalType.APPLICATION: ("name",),
    PrincipalType.ROLE: ("name",),
}
"""Alternate unique attributes per principal type, in lookup priority order."""

# Built-in role identifiers. The "$" prefix keeps them out of the namespace of
# user-defined role names.
EVERYONE = "$everyone"
AUTHENTICATED = "$authenticated"
UNAUTHENTICATED = "$unauthenticated"
OWNER = "$owner"

BUILTIN_ROLES: tuple[str, ...] = (EVERYONE, AUTHENTICATED, UNAUTHENTICATED, OWNER)

PrincipalId = int | str | UUID
"""Opaque principal identifier as stored in a role mapping."""


class RoleId(RootModel[UUID]):
    """Unique identifier for a Role."""

    @classmethod
    def generate(cls) -> "RoleId":
        return cls(uuid4())

    @classmethod
    def parse(cls, value: Any) -> "RoleId | None":
        """Interpret ``value`` as a role id, or None if it cannot be one."""
        if isinstance(value, RoleId):
            return value
        try:
            return cls(UUID(str(value)))
        except ValueError:
            return None

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class RoleMappingId(RootModel[UUID]):
    """Unique identifier for a RoleMapping."""

    @classmethod
    def generate(cls) -> "RoleMappingId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


def principal_key(value: Any) -> str:
    """Canonical string form of a principal id (``5``, ``"5"`` -> ``"5"``)."""
    return str(getattr(value, "root", value))


def same_principal_id(a: Any, b: Any) -> bool:
    """Loose equality between two principal ids.

    Upstream callers pass ids as ints, strings or id value objects; all of
    them compare by their canonical string form. ``None`` never matches.
    """
    if a is None or b is None:
        return False
    return principal_key(a) == principal_key(b)
