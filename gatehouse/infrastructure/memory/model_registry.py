"""Declarative in-memory model registry."""

import logging
from collections.abc import Mapping
from typing import Any

from gatehouse.domain.access.model.value import PrincipalType
from gatehouse.domain.access.port.model_registry import ModelRegistry
from gatehouse.domain.access.port.principal_store import PrincipalStore

logger = logging.getLogger(__name__)


class InMemoryModelRegistry(ModelRegistry):
    """Model classes, their stores and their belongs-to relations.

    Relations come from the ``belongs_to`` argument, or else from a
    ``__belongs_to__`` class attribute mapping foreign-key attribute names
    to principal types, e.g. ``{"user_id": PrincipalType.USER}``.
    """

    def __init__(self) -> None:
        self._stores: dict[Any, PrincipalStore] = {}
        self._relations: dict[Any, dict[str, PrincipalType]] = {}
        self._principal_models: dict[PrincipalType, Any] = {}

    def register(
        self,
        model_class: Any,
        store: PrincipalStore,
        *,
        belongs_to: Mapping[str, PrincipalType] | None = None,
        principal_type: PrincipalType | None = None,
    ) -> None:
        """Register `model_class`; `principal_type` marks it as that type's principal model."""
        if belongs_to is None:
            belongs_to = getattr(model_class, "__belongs_to__", {})
        self._stores[model_class] = store
        self._relations[model_class] = dict(belongs_to)
        if principal_type is not None:
            self._principal_models[principal_type] = model_class

    async def get_model(self, model_class: Any, model_id: Any) -> Any | None:
        store = self._stores.get(model_class)
        if store is None:
            logger.warning("Model %r is not registered", model_class)
            return None
        return await store.get(model_id)

    def belongs_to(self, model_class: Any, principal_type: PrincipalType) -> list[str]:
        relations = self._relations.get(model_class, {})
        return [key for key, target in relations.items() if target == principal_type]

    def model_for(self, principal_type: PrincipalType) -> Any | None:
        return self._principal_models.get(principal_type)
