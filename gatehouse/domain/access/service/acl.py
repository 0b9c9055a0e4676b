"""Access facade combining principal resolution with role checks."""

from typing import Any

from gatehouse.domain.access.model.context import ResolutionContext
from gatehouse.domain.access.model.value import OWNER, PrincipalType
from gatehouse.domain.access.service.directory import PrincipalDirectory
from gatehouse.domain.access.service.engine import RoleResolver
from gatehouse.domain.access.service.resolver import Resolver, Strategy
from gatehouse.domain.shared.service import Service


class AccessControl(Service):
    """Entry point for callers that hold principal references rather than ids."""

    _directory: PrincipalDirectory
    _resolver: RoleResolver

    async def resolve_principal(self, principal_type: PrincipalType, key: Any) -> Any | None:
        """Resolve `key` (id, username, email, name...) to a principal record."""
        return await self._directory.resolve(principal_type, key)

    async def is_mapped_to_role(
        self,
        principal_type: PrincipalType,
        key: Any,
        role: Any,
    ) -> bool:
        """Check whether the principal named by `key` is a member of `role`.

        An unresolvable `key` is not a member.
        """
        principal = await self._directory.resolve(principal_type, key)
        if principal is None:
            return False
        return await self._resolver.is_in_role(
            role,
            ResolutionContext(principal_type=principal_type, principal_id=principal.id),
        )

    async def is_owner(self, model_class: Any, model_id: Any, principal_id: Any) -> bool:
        """Check whether user `principal_id` owns entity `model_id` of `model_class`."""
        return await self._resolver.is_in_role(
            OWNER,
            ResolutionContext(
                principal_type=PrincipalType.USER,
                principal_id=principal_id,
                model_class=model_class,
                model_id=model_id,
            ),
        )

    async def is_in_role(self, role: Any, context: ResolutionContext) -> bool:
        return await self._resolver.is_in_role(role, context)

    async def get_roles(self, context: ResolutionContext) -> list[str]:
        return await self._resolver.get_roles(context)

    def register_resolver(self, identifier: Any, strategy: Strategy) -> Resolver:
        return self._resolver.register_resolver(identifier, strategy)
