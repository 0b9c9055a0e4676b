"""Resolver registry: role identifier -> dynamic membership strategy.

A strategy is any callable taking ``(role_identifier, context)``. It may

- return a ``bool`` directly,
- return an awaitable (coroutine function, ``asyncio.Future``, ...), or
- accept a third ``done`` argument and report its answer by calling
  ``done(result)`` (or ``done.fail(error)``), possibly later on the loop.

The registry wraps each strategy in a `Resolver` whose call is always
``async -> bool``, so the resolution engine never inspects strategy style.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from gatehouse.domain.access.model.context import ResolutionContext

if TYPE_CHECKING:
    from gatehouse.domain.access.port.model_registry import ModelRegistry

logger = logging.getLogger(__name__)

Strategy = Callable[..., bool | Awaitable[bool] | None]

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


class Completion:
    """Completion handle handed to callback-style strategies.

    Must be invoked from the event loop running the membership check.
    Only the first outcome counts.
    """

    def __init__(self, future: asyncio.Future[bool]) -> None:
        self._future = future

    def __call__(self, result: Any) -> None:
        if not self._future.done():
            self._future.set_result(bool(result))

    def fail(self, error: BaseException) -> None:
        if not self._future.done():
            self._future.set_exception(error)


def _takes_completion(strategy: Strategy) -> bool:
    try:
        params = inspect.signature(strategy).parameters.values()
    except (TypeError, ValueError):
        return False
    required = [p for p in params if p.kind in _POSITIONAL and p.default is p.empty]
    return len(required) >= 3


@dataclass(frozen=True)
class Resolver:
    """A registered strategy normalized to ``async (role, context) -> bool``."""

    identifier: str
    strategy: Strategy
    takes_completion: bool = False

    @classmethod
    def wrap(cls, identifier: str, strategy: Strategy) -> Resolver:
        return cls(
            identifier=identifier,
            strategy=strategy,
            takes_completion=_takes_completion(strategy),
        )

    async def __call__(self, role: str, context: ResolutionContext) -> bool:
        if self.takes_completion:
            future: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
            outcome = self.strategy(role, context, Completion(future))
            if inspect.isawaitable(outcome):
                await outcome
            return await future

        outcome = self.strategy(role, context)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return bool(outcome)


class ResolverRegistry:
    """Mapping from role identifier to its resolver.

    Each resolution engine owns its own registry. Registration is expected at
    startup; a concurrent reader sees either the old or the new resolver for
    an identifier, never a partial one.
    """

    def __init__(self, strategies: Mapping[str, Strategy] | None = None) -> None:
        self._resolvers: dict[str, Resolver] = {}
        for identifier, strategy in (strategies or {}).items():
            self.register(identifier, strategy)

    @classmethod
    def with_builtins(cls, model_registry: ModelRegistry | None = None) -> ResolverRegistry:
        """A registry seeded with EVERYONE, AUTHENTICATED, UNAUTHENTICATED and OWNER.

        Without `model_registry`, OWNER reads entities through the registry
        bound by the calling `RoleResolver`.
        """
        from gatehouse.domain.access.service.builtin import builtin_strategies

        return cls(builtin_strategies(model_registry))

    def register(self, identifier: Any, strategy: Strategy) -> Resolver:
        """Register `strategy` for `identifier`, replacing any previous one."""
        if not callable(strategy):
            raise TypeError(f"Resolver strategy for {identifier!r} must be callable")

        key = str(identifier)
        resolver = Resolver.wrap(key, strategy)
        replaced = key in self._resolvers
        self._resolvers[key] = resolver

        if replaced:
            logger.info("Resolver for role %r replaced", key)
        else:
            logger.debug("Resolver registered for role %r", key)
        return resolver

    def get(self, identifier: Any) -> Resolver | None:
        return self._resolvers.get(str(identifier))

    def identifiers(self) -> list[str]:
        return list(self._resolvers)

    def __contains__(self, identifier: object) -> bool:
        return str(identifier) in self._resolvers

    def __len__(self) -> int:
        return len(self._resolvers)
