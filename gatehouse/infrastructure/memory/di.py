"""DI provider keeping every store in process memory.

All stores are APP-scoped: each unit of work sees the same data.
"""

from dishka import provide

from gatehouse.domain.access.adapter.role_principal_store import RolePrincipalStore
from gatehouse.domain.access.model.principal import Application, User
from gatehouse.domain.access.model.role import Role
from gatehouse.domain.access.model.value import PrincipalType
from gatehouse.domain.access.port.model_registry import ModelRegistry
from gatehouse.domain.access.port.principal_store import PrincipalStores
from gatehouse.domain.access.port.repository import RoleMappingRepository, RoleRepository
from gatehouse.infrastructure.memory.model_registry import InMemoryModelRegistry
from gatehouse.infrastructure.memory.repository import (
    InMemoryRoleMappingRepository,
    InMemoryRoleRepository,
)
from gatehouse.infrastructure.memory.store import InMemoryRecordStore
from gatehouse.util.di.base import StorageProvider
from gatehouse.util.di.scope import Scope


class MemoryStorageProvider(StorageProvider):
    __backend__ = "memory"

    @provide(scope=Scope.APP)
    def get_role_repo(self) -> RoleRepository:
        return InMemoryRoleRepository()

    @provide(scope=Scope.APP)
    def get_mapping_repo(self) -> RoleMappingRepository:
        return InMemoryRoleMappingRepository()

    @provide(scope=Scope.APP)
    def get_principal_stores(self, role_repo: RoleRepository) -> PrincipalStores:
        return PrincipalStores(
            {
                PrincipalType.USER: InMemoryRecordStore(User),
                PrincipalType.APPLICATION: InMemoryRecordStore(Application),
                PrincipalType.ROLE: RolePrincipalStore(role_repo),
            }
        )

    @provide(scope=Scope.APP)
    def get_model_registry(self, stores: PrincipalStores) -> ModelRegistry:
        registry = InMemoryModelRegistry()
        registry.register(User, stores.get(PrincipalType.USER), principal_type=PrincipalType.USER)
        registry.register(
            Application,
            stores.get(PrincipalType.APPLICATION),
            principal_type=PrincipalType.APPLICATION,
        )
        registry.register(Role, stores.get(PrincipalType.ROLE), principal_type=PrincipalType.ROLE)
        return registry
