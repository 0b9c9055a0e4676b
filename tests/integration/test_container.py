"""Integration tests for the DI container over both storage backends."""

import pytest

from gatehouse.application.di import create_container
from gatehouse.config import Config
from gatehouse.domain.access.model import AUTHENTICATED, EVERYONE, PrincipalType, ResolutionContext
from gatehouse.domain.access.port import PrincipalStores
from gatehouse.domain.access.service import AccessControl, ResolverRegistry, RoleService
from gatehouse.util.di.scope import Scope


def make_config(backend: str) -> Config:
    return Config(database={"backend": backend, "url": "sqlite+aiosqlite:///:memory:"})


@pytest.mark.asyncio
@pytest.mark.parametrize("backend", ["memory", "sql"])
class TestContainer:
    async def test_assignment_visible_in_next_unit_of_work(self, backend):
        container = create_container(make_config(backend))
        try:
            async with container(scope=Scope.UOW) as uow:
                stores = await uow.get(PrincipalStores)
                john = await stores.get(PrincipalType.USER).create(username="john")
                roles = await uow.get(RoleService)
                admin = await roles.create("admin")
                await roles.assign(admin, PrincipalType.USER, john.id)

            async with container(scope=Scope.UOW) as uow:
                acl = await uow.get(AccessControl)

                assert await acl.is_mapped_to_role(PrincipalType.USER, "john", "admin")
                assert await acl.get_roles(ResolutionContext(PrincipalType.USER, john.id)) == [
                    EVERYONE,
                    AUTHENTICATED,
                    str(admin.id),
                ]
        finally:
            await container.close()

    async def test_registered_resolver_outlives_unit_of_work(self, backend):
        container = create_container(make_config(backend))
        try:
            async with container(scope=Scope.UOW) as uow:
                acl = await uow.get(AccessControl)
                acl.register_resolver("staff", lambda role, context: True)

            registry = await container.get(ResolverRegistry)
            assert "staff" in registry

            async with container(scope=Scope.UOW) as uow:
                acl = await uow.get(AccessControl)
                assert await acl.is_in_role("staff", ResolutionContext(PrincipalType.USER, 1))
        finally:
            await container.close()
