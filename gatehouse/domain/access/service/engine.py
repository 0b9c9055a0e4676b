"""Role resolution engine: membership checks over strategies and mappings."""

import logging
from typing import Any

import logfire

from gatehouse.domain.access.model.context import ResolutionContext
from gatehouse.domain.access.model.role import Role
from gatehouse.domain.access.model.role_mapping import RoleMapping
from gatehouse.domain.access.model.value import (
    AUTHENTICATED,
    EVERYONE,
    UNAUTHENTICATED,
    RoleId,
)
from gatehouse.domain.access.port.model_registry import ModelRegistry
from gatehouse.domain.access.port.repository import (
    RoleMappingFilter,
    RoleMappingRepository,
    RoleRepository,
)
from gatehouse.domain.access.service.builtin import bind_model_registry
from gatehouse.domain.access.service.resolver import Resolver, ResolverRegistry, Strategy
from gatehouse.domain.shared.service import Service

logger = logging.getLogger(__name__)


class RoleResolver(Service):
    """Answers "is this principal in role R" and "which roles does it hold".

    Identifiers with a registered strategy are resolved by that strategy
    alone. Everything else is looked up as a persisted role and checked
    against the mapping store. Role-to-role membership is one level deep:
    a role assigned as principal of another role does not pass its own
    members through.

    Strategies run with this unit of work's model registry bound, so OWNER
    reads entities through the same session as the role and mapping stores.
    """

    _registry: ResolverRegistry
    _role_repo: RoleRepository
    _mapping_repo: RoleMappingRepository
    _model_registry: ModelRegistry

    def register_resolver(self, identifier: Any, strategy: Strategy) -> Resolver:
        """Register a dynamic strategy for `identifier`, replacing any previous one."""
        return self._registry.register(identifier, strategy)

    async def is_in_role(self, role: Any, context: ResolutionContext) -> bool:
        """Check membership of the context's principal in `role`.

        `role` may be a built-in identifier, a custom resolver identifier, a
        role id or a role name. Unknown roles resolve to False.
        """
        identifier = str(role.id) if isinstance(role, Role) else str(role)

        with logfire.span(
            "is_in_role {role}",
            role=identifier,
            principal_type=str(context.principal_type),
        ):
            resolver = self._registry.get(identifier)
            if resolver is not None:
                with bind_model_registry(self._model_registry):
                    return await resolver(identifier, context)

            found = role if isinstance(role, Role) else await self.find_role(identifier)
            if found is None:
                logger.debug("Role %r is not defined; not a member", identifier)
                return False

            return len(await self._mappings(found.id, context)) > 0

    async def get_roles(self, context: ResolutionContext) -> list[str]:
        """All role identifiers the context's principal holds.

        Always EVERYONE, exactly one of AUTHENTICATED / UNAUTHENTICATED, then
        the ids of persisted roles the principal is mapped to, in role-name
        order. Custom strategies are not enumerated.
        """
        with logfire.span("get_roles", principal_type=str(context.principal_type)):
            roles = [EVERYONE, AUTHENTICATED if context.is_authenticated else UNAUTHENTICATED]
            if context.principal_id is None:
                return roles

            # One read for the principal's mappings, then every defined role
            # is checked against it.
            mapped = {
                str(m.role_id)
                for m in await self._mapping_repo.find(
                    RoleMappingFilter(
                        principal_type=context.principal_type,
                        principal_id=context.principal_id,
                    )
                )
            }
            for defined in await self._role_repo.find():
                role_id = str(defined.id)
                if role_id in mapped and role_id not in roles:
                    roles.append(role_id)

            logger.debug(
                "Roles for %s %s: %s",
                context.principal_type,
                context.principal_id,
                roles,
            )
            return roles

    async def count_memberships(self, role: Role | RoleId, context: ResolutionContext) -> int:
        """Number of mapping rows placing the principal in `role`, duplicates included."""
        role_id = role.id if isinstance(role, Role) else role
        return len(await self._mappings(role_id, context))

    async def find_role(self, identifier: Any) -> Role | None:
        """Look a role up by id, then by name."""
        role_id = RoleId.parse(identifier)
        if role_id is not None:
            found = await self._role_repo.get(role_id)
            if found is not None:
                return found
        return await self._role_repo.get_by_name(str(identifier))

    async def _mappings(self, role_id: RoleId, context: ResolutionContext) -> list[RoleMapping]:
        if context.principal_id is None:
            return []
        return await self._mapping_repo.find(
            RoleMappingFilter(
                role_id=role_id,
                principal_type=context.principal_type,
                principal_id=context.principal_id,
            )
        )
