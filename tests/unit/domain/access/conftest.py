"""Fixtures wiring the access services over in-memory stores."""

import pytest

from gatehouse.domain.access.adapter.role_principal_store import RolePrincipalStore
from gatehouse.domain.access.model import (
    DEFAULT_ALTERNATE_KEYS,
    Application,
    PrincipalType,
    Role,
    User,
)
from gatehouse.domain.access.port import PrincipalStores
from gatehouse.domain.access.service import (
    AccessControl,
    PrincipalDirectory,
    ResolverRegistry,
    RoleResolver,
    RoleService,
)
from gatehouse.infrastructure.memory import (
    InMemoryModelRegistry,
    InMemoryRecordStore,
    InMemoryRoleMappingRepository,
    InMemoryRoleRepository,
)


@pytest.fixture
def role_repo() -> InMemoryRoleRepository:
    return InMemoryRoleRepository()


@pytest.fixture
def mapping_repo() -> InMemoryRoleMappingRepository:
    return InMemoryRoleMappingRepository()


@pytest.fixture
def users() -> InMemoryRecordStore[User]:
    return InMemoryRecordStore(User)


@pytest.fixture
def applications() -> InMemoryRecordStore[Application]:
    return InMemoryRecordStore(Application)


@pytest.fixture
def stores(role_repo, users, applications) -> PrincipalStores:
    return PrincipalStores(
        {
            PrincipalType.USER: users,
            PrincipalType.APPLICATION: applications,
            PrincipalType.ROLE: RolePrincipalStore(role_repo),
        }
    )


@pytest.fixture
def model_registry(stores) -> InMemoryModelRegistry:
    registry = InMemoryModelRegistry()
    registry.register(User, stores.get(PrincipalType.USER), principal_type=PrincipalType.USER)
    registry.register(
        Application,
        stores.get(PrincipalType.APPLICATION),
        principal_type=PrincipalType.APPLICATION,
    )
    registry.register(Role, stores.get(PrincipalType.ROLE), principal_type=PrincipalType.ROLE)
    return registry


@pytest.fixture
def registry(model_registry) -> ResolverRegistry:
    return ResolverRegistry.with_builtins(model_registry)


@pytest.fixture
def role_service(role_repo, mapping_repo, stores) -> RoleService:
    return RoleService(_role_repo=role_repo, _mapping_repo=mapping_repo, _stores=stores)


@pytest.fixture
def resolver(registry, role_repo, mapping_repo, model_registry) -> RoleResolver:
    return RoleResolver(
        _registry=registry,
        _role_repo=role_repo,
        _mapping_repo=mapping_repo,
        _model_registry=model_registry,
    )


@pytest.fixture
def directory(stores) -> PrincipalDirectory:
    return PrincipalDirectory(_stores=stores, _alternate_keys=DEFAULT_ALTERNATE_KEYS)


@pytest.fixture
def acl(directory, resolver) -> AccessControl:
    return AccessControl(_directory=directory, _resolver=resolver)
