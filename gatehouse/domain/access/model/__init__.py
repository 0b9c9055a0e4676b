"""Access domain models."""

from .context import PrincipalReference, ResolutionContext
from .principal import Application, User
from .role import Role
from .role_mapping import RoleMapping
from .value import (
    APP,
    APPLICATION,
    AUTHENTICATED,
    BUILTIN_ROLES,
    DEFAULT_ALTERNATE_KEYS,
    EVERYONE,
    OWNER,
    ROLE,
    UNAUTHENTICATED,
    USER,
    PrincipalId,
    PrincipalType,
    RoleId,
    RoleMappingId,
    principal_key,
    same_principal_id,
)

__all__ = [
    "APP",
    "APPLICATION",
    "AUTHENTICATED",
    "BUILTIN_ROLES",
    "DEFAULT_ALTERNATE_KEYS",
    "EVERYONE",
    "OWNER",
    "ROLE",
    "UNAUTHENTICATED",
    "USER",
    "Application",
    "PrincipalId",
    "PrincipalReference",
    "PrincipalType",
    "ResolutionContext",
    "Role",
    "RoleId",
    "RoleMapping",
    "RoleMappingId",
    "User",
    "principal_key",
    "same_principal_id",
]
