"""Built-in role strategies."""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import logfire

from gatehouse.domain.access.model.context import ResolutionContext
from gatehouse.domain.access.model.value import (
    AUTHENTICATED,
    EVERYONE,
    OWNER,
    UNAUTHENTICATED,
    PrincipalType,
    same_principal_id,
)
from gatehouse.domain.access.port.model_registry import ModelRegistry
from gatehouse.domain.access.service.resolver import Strategy
from gatehouse.domain.shared.error import ConfigurationError

# Conventional ownership attributes checked when a model declares no
# belongs-to relation to the user store.
OWNER_FALLBACK_KEYS: tuple[str, ...] = ("owner_id", "user_id")

# Model registry of the unit of work the current membership check runs in.
current_model_registry: ContextVar[ModelRegistry | None] = ContextVar(
    "current_model_registry", default=None
)


@contextmanager
def bind_model_registry(model_registry: ModelRegistry) -> Iterator[None]:
    """Make `model_registry` the one OWNER checks read entities through."""
    token = current_model_registry.set(model_registry)
    try:
        yield
    finally:
        current_model_registry.reset(token)


def everyone(role: str, context: ResolutionContext) -> bool:
    return True


def authenticated(role: str, context: ResolutionContext) -> bool:
    return context.is_authenticated


def unauthenticated(role: str, context: ResolutionContext) -> bool:
    return not context.is_authenticated


def _read(entity: Any, attribute: str) -> Any:
    if isinstance(entity, Mapping):
        return entity.get(attribute)
    return getattr(entity, attribute, None)


class OwnerResolver:
    """Ownership through foreign keys of the entity named in the context.

    True if any belongs-to foreign key from the entity's model to the
    context's principal store holds the context's principal id. A missing
    entity or an absent match resolves to False.

    Entities are read through the model registry bound for the running
    unit of work (see `bind_model_registry`), falling back to the one given
    at construction.
    """

    def __init__(self, model_registry: ModelRegistry | None = None) -> None:
        self._default_models = model_registry

    def _models(self) -> ModelRegistry:
        models = current_model_registry.get()
        if models is None:
            models = self._default_models
        if models is None:
            raise ConfigurationError(
                "No model registry bound for ownership checks",
                code="model_registry_missing",
            )
        return models

    async def __call__(self, role: str, context: ResolutionContext) -> bool:
        if not context.targets_model or context.principal_id is None:
            return False

        models = self._models()

        # A principal owns its own record.
        if context.model_class is models.model_for(context.principal_type):
            return same_principal_id(context.model_id, context.principal_id)

        entity = await models.get_model(context.model_class, context.model_id)
        if entity is None:
            logfire.debug(
                "Ownership target not found",
                model_id=str(context.model_id),
            )
            return False

        keys = models.belongs_to(context.model_class, context.principal_type)
        if not keys and context.principal_type == PrincipalType.USER:
            keys = list(OWNER_FALLBACK_KEYS)

        return any(same_principal_id(_read(entity, key), context.principal_id) for key in keys)


def builtin_strategies(model_registry: ModelRegistry | None = None) -> dict[str, Strategy]:
    return {
        EVERYONE: everyone,
        AUTHENTICATED: authenticated,
        UNAUTHENTICATED: unauthenticated,
        OWNER: OwnerResolver(model_registry),
    }
