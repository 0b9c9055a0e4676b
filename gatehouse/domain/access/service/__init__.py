"""Access domain services."""

from .acl import AccessControl
from .directory import PrincipalDirectory
from .engine import RoleResolver
from .resolver import Completion, Resolver, ResolverRegistry, Strategy
from .role import RoleService

__all__ = [
    "AccessControl",
    "Completion",
    "PrincipalDirectory",
    "Resolver",
    "ResolverRegistry",
    "RoleResolver",
    "RoleService",
    "Strategy",
]
