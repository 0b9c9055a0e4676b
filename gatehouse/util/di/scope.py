"""Custom Dishka scopes for gatehouse."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Gatehouse dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (singletons, resolver registry)
    - UOW: Unit of Work (one authorization request or admin operation)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
