from dishka import AsyncContainer, make_async_container

from gatehouse.config import Config
from gatehouse.domain.access.util.di import AccessProvider
from gatehouse.infrastructure.memory import MemoryStorageProvider  # noqa: F401  # registers backend
from gatehouse.infrastructure.persistence import PersistenceProvider  # noqa: F401  # registers backend
from gatehouse.util.di.base import StorageProvider, get_provider
from gatehouse.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    storage = get_provider(StorageProvider, config.database.backend)

    return make_async_container(
        storage(),
        AccessProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
