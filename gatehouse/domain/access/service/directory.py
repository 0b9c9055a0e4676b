"""Principal directory: resolve a principal reference to a principal record."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from gatehouse.domain.access.model.context import PrincipalReference
from gatehouse.domain.access.model.value import PrincipalType
from gatehouse.domain.access.port.principal_store import PrincipalStores
from gatehouse.domain.shared.service import Service

logger = logging.getLogger(__name__)


class PrincipalDirectory(Service):
    """Resolves principals by primary id or by an alternate unique attribute."""

    _stores: PrincipalStores
    _alternate_keys: Mapping[PrincipalType, Sequence[str]]

    async def resolve(self, principal_type: PrincipalType, key: Any) -> Any | None:
        """Find the principal of `principal_type` identified by `key`.

        The primary id is tried first, then each alternate key in priority
        order. Returns None when nothing matches.
        """
        if key is None:
            return None

        store = self._stores.get(principal_type)

        principal = await store.get(key)
        if principal is not None:
            return principal

        for field in self._alternate_keys.get(principal_type, ()):
            principal = await store.find_one(field, key)
            if principal is not None:
                logger.debug("Resolved %s %r by %s", principal_type, key, field)
                return principal

        logger.debug("No %s matches %r", principal_type, key)
        return None

    async def resolve_reference(self, reference: PrincipalReference) -> Any | None:
        return await self.resolve(reference.principal_type, reference.key)
