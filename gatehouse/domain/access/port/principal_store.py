"""Principal store port: lookup of users, applications and roles as principals."""

from abc import abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from gatehouse.domain.access.model.value import PrincipalId, PrincipalType
from gatehouse.domain.shared.error import ConfigurationError
from gatehouse.domain.shared.port import Port


@dataclass(frozen=True)
class PrincipalQuery:
    """Query refinement forwarded verbatim to a principal store.

    - `fields`: projection; attributes outside it come back as None
    - `where`: attribute equality constraints
    - `limit`: maximum number of records
    """

    fields: tuple[str, ...] | None = None
    where: Mapping[str, Any] | None = None
    limit: int | None = None


class PrincipalStore(Port, Protocol):
    """Read access to the records of one principal type."""

    @abstractmethod
    async def get(self, principal_id: PrincipalId) -> Any | None:
        """Get a principal by primary id (loose equality)."""
        ...

    @abstractmethod
    async def find_one(self, field: str, value: Any) -> Any | None:
        """Get the principal whose unique `field` equals `value`."""
        ...

    @abstractmethod
    async def find(
        self,
        query: PrincipalQuery | None = None,
        *,
        ids: Sequence[PrincipalId] | None = None,
    ) -> list[Any]:
        """List principals, optionally restricted to `ids`."""
        ...


class PrincipalStores:
    """The principal store for each principal type."""

    def __init__(self, stores: Mapping[PrincipalType, PrincipalStore]) -> None:
        self._stores = dict(stores)

    def get(self, principal_type: PrincipalType) -> PrincipalStore:
        """Return the store for `principal_type`.

        Raises:
            ConfigurationError: If no store is registered for the type.
        """
        store = self._stores.get(principal_type)
        if store is None:
            raise ConfigurationError(
                f"No principal store registered for {principal_type}",
                code="principal_store_missing",
            )
        return store

    def __contains__(self, principal_type: object) -> bool:
        return principal_type in self._stores
