"""Model registry port: entity loading and relation introspection."""

from abc import abstractmethod
from typing import Any, Protocol

from gatehouse.domain.access.model.value import PrincipalType
from gatehouse.domain.shared.port import Port


class ModelRegistry(Port, Protocol):
    """Introspection over the persisted models ownership is checked against.

    Used by the OWNER resolver to load an entity and find which of its
    foreign keys point at a principal store.
    """

    @abstractmethod
    async def get_model(self, model_class: Any, model_id: Any) -> Any | None:
        """Load one entity of `model_class`, or None if it does not exist."""
        ...

    @abstractmethod
    def belongs_to(self, model_class: Any, principal_type: PrincipalType) -> list[str]:
        """Names of foreign-key attributes on `model_class` referencing the
        store of `principal_type`, in declaration order."""
        ...

    @abstractmethod
    def model_for(self, principal_type: PrincipalType) -> Any | None:
        """The model class backing `principal_type`, if registered."""
        ...
