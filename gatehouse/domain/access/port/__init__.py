"""Access domain ports."""

from .model_registry import ModelRegistry
from .principal_store import PrincipalQuery, PrincipalStore, PrincipalStores
from .repository import (
    RoleFilter,
    RoleMappingFilter,
    RoleMappingRepository,
    RoleRepository,
)

__all__ = [
    "ModelRegistry",
    "PrincipalQuery",
    "PrincipalStore",
    "PrincipalStores",
    "RoleFilter",
    "RoleMappingFilter",
    "RoleMappingRepository",
    "RoleRepository",
]
