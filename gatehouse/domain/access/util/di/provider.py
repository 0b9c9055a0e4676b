"""DI provider for access domain services."""

import logging

from dishka import from_context, provide

from gatehouse.config import Config
from gatehouse.domain.access.port.principal_store import PrincipalStores
from gatehouse.domain.access.service.acl import AccessControl
from gatehouse.domain.access.service.directory import PrincipalDirectory
from gatehouse.domain.access.service.engine import RoleResolver
from gatehouse.domain.access.service.resolver import ResolverRegistry
from gatehouse.domain.access.service.role import RoleService
from gatehouse.util.di.base import Provider
from gatehouse.util.di.scope import Scope

logger = logging.getLogger(__name__)


class AccessProvider(Provider):
    """DI provider for role administration and role resolution."""

    config = from_context(provides=Config, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def get_resolver_registry(self) -> ResolverRegistry:
        """Provide the registry shared by every unit of work.

        Strategies registered through any RoleResolver land here and stay in
        effect for the lifetime of the container. OWNER reads entities through
        the model registry of the unit of work running the check.
        """
        registry = ResolverRegistry.with_builtins()
        logger.debug("Resolver registry ready: %s", registry.identifiers())
        return registry

    @provide(scope=Scope.UOW)
    def get_principal_directory(self, config: Config, stores: PrincipalStores) -> PrincipalDirectory:
        return PrincipalDirectory(_stores=stores, _alternate_keys=config.access.alternate_keys)

    # Services
    role_service = provide(RoleService, scope=Scope.UOW)
    role_resolver = provide(RoleResolver, scope=Scope.UOW)
    access_control = provide(AccessControl, scope=Scope.UOW)
