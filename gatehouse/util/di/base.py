from __future__ import annotations

from typing import ClassVar, Literal, Type

from dishka import Provider as DishkaProvider

from gatehouse.domain.shared.error import ConfigurationError

Backend = Literal["sql", "memory"]


class Provider(DishkaProvider):
    """Base for all DI providers with unified metadata.

    Attributes:
        __backend__: Storage backend a provider implements (None for
            providers that work with any backend)
    """

    __backend__: ClassVar[Backend | None] = None


class StorageProvider(Provider):
    """Base for providers of repositories, principal stores and the model registry."""


def get_provider(base: Type[Provider], backend: Backend) -> Type[Provider]:
    """Get appropriate provider class.

    Automatically determines if provider is swappable by checking for subclasses.

    - No subclasses: Concrete provider, use directly
    - Has subclasses: Swappable component, select by __backend__

    Args:
        base: Provider base class
        backend: Configured storage backend

    Returns:
        Provider class (not instantiated)

    Raises:
        ConfigurationError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        # Concrete provider - no implementations, use as-is
        return base

    impl = next((c for c in subclasses if c.__backend__ == backend), None)

    if not impl:
        raise ConfigurationError(
            f"No {backend} implementation for {base.__name__}",
            code="provider_missing",
        )

    return impl
