import asyncio
import logging
from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from gatehouse.config import Config
from gatehouse.domain.access.adapter.role_principal_store import RolePrincipalStore
from gatehouse.domain.access.model.principal import Application, User
from gatehouse.domain.access.model.value import PrincipalType
from gatehouse.domain.access.port.model_registry import ModelRegistry
from gatehouse.domain.access.port.principal_store import PrincipalStores
from gatehouse.domain.access.port.repository import RoleMappingRepository, RoleRepository
from gatehouse.infrastructure.persistence.database import (
    create_db_engine,
    create_schema,
    create_session_factory,
)
from gatehouse.infrastructure.persistence.migrate import run_migrations
from gatehouse.infrastructure.persistence.model_registry import SQLAlchemyModelRegistry
from gatehouse.infrastructure.persistence.repository.principal import SQLAlchemyPrincipalStore
from gatehouse.infrastructure.persistence.repository.role import (
    SQLAlchemyRoleMappingRepository,
    SQLAlchemyRoleRepository,
)
from gatehouse.infrastructure.persistence.tables import applications_table, users_table
from gatehouse.util.di.base import StorageProvider
from gatehouse.util.di.scope import Scope

logger = logging.getLogger(__name__)


class PersistenceProvider(StorageProvider):
    __backend__ = "sql"

    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config.database)
        if config.database.auto_migrate:
            if engine.url.get_backend_name() == "sqlite":
                await create_schema(engine)
            else:
                # Alembic drives its own sync engine
                await asyncio.to_thread(run_migrations, config.database.url)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    # Ownership lookups share the unit of work's session
    @provide(scope=Scope.UOW)
    def get_model_registry(self, session: AsyncSession) -> ModelRegistry:
        return SQLAlchemyModelRegistry(session)

    # UOW-scoped repositories
    role_repo = provide(SQLAlchemyRoleRepository, scope=Scope.UOW, provides=RoleRepository)
    mapping_repo = provide(
        SQLAlchemyRoleMappingRepository,
        scope=Scope.UOW,
        provides=RoleMappingRepository,
    )

    @provide(scope=Scope.UOW)
    def get_principal_stores(
        self, session: AsyncSession, role_repo: RoleRepository
    ) -> PrincipalStores:
        return PrincipalStores(
            {
                PrincipalType.USER: SQLAlchemyPrincipalStore(session, users_table, User),
                PrincipalType.APPLICATION: SQLAlchemyPrincipalStore(
                    session, applications_table, Application
                ),
                PrincipalType.ROLE: RolePrincipalStore(role_repo),
            }
        )
