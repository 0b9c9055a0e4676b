"""Unit tests for PrincipalDirectory and the AccessControl facade."""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from gatehouse.domain.access.model import (
    AUTHENTICATED,
    EVERYONE,
    PrincipalReference,
    PrincipalType,
    ResolutionContext,
)
from gatehouse.domain.access.port import PrincipalStores
from gatehouse.domain.access.service import AccessControl, PrincipalDirectory, RoleService
from gatehouse.domain.shared.error import ConfigurationError
from gatehouse.domain.shared.model.entity import Entity
from gatehouse.infrastructure.memory import InMemoryRecordStore


class Album(Entity):
    id: int | None = None
    user_id: int | None = None


@pytest_asyncio.fixture
async def people(users, applications, role_service: RoleService):
    """john is an admin, mary is not; demo is an application."""
    john = await users.create(username="john", email="john@doe.com")
    mary = await users.create(username="mary", email="mary@doe.com")
    demo = await applications.create(name="demo")
    admin = await role_service.create("admin")
    await role_service.assign(admin, PrincipalType.USER, john.id)
    return {"john": john, "mary": mary, "demo": demo, "admin": admin}


class TestPrincipalDirectory:
    """Tests for PrincipalDirectory.resolve."""

    @pytest.mark.asyncio
    async def test_id_username_and_email_resolve_alike(self, directory: PrincipalDirectory, users):
        john = await users.create(username="john", email="john@doe.com")

        by_id = await directory.resolve(PrincipalType.USER, john.id)
        by_username = await directory.resolve(PrincipalType.USER, "john")
        by_email = await directory.resolve(PrincipalType.USER, "john@doe.com")

        assert by_id == by_username == by_email == john

    @pytest.mark.asyncio
    async def test_string_id_resolves(self, directory: PrincipalDirectory, users):
        john = await users.create(username="john")

        assert await directory.resolve(PrincipalType.USER, str(john.id)) == john

    @pytest.mark.asyncio
    async def test_application_by_name(self, directory: PrincipalDirectory, applications):
        demo = await applications.create(name="demo")

        assert await directory.resolve(PrincipalType.APPLICATION, "demo") == demo

    @pytest.mark.asyncio
    async def test_role_by_name_and_id(self, directory: PrincipalDirectory, role_service):
        admin = await role_service.create("admin")

        assert await directory.resolve(PrincipalType.ROLE, "admin") == admin
        assert await directory.resolve(PrincipalType.ROLE, str(admin.id)) == admin

    @pytest.mark.asyncio
    async def test_resolve_reference(self, directory: PrincipalDirectory, users):
        mary = await users.create(username="mary")

        reference = PrincipalReference(PrincipalType.USER, "mary")

        assert await directory.resolve_reference(reference) == mary

    @pytest.mark.asyncio
    async def test_unresolvable_is_none(self, directory: PrincipalDirectory, users):
        await users.create(username="john")

        assert await directory.resolve(PrincipalType.USER, "nobody") is None
        assert await directory.resolve(PrincipalType.USER, None) is None

    @pytest.mark.asyncio
    async def test_alternate_keys_tried_in_order(self):
        store = AsyncMock()
        store.get.return_value = None
        store.find_one.side_effect = [None, "found-by-email"]
        directory = PrincipalDirectory(
            _stores=PrincipalStores({PrincipalType.USER: store}),
            _alternate_keys={PrincipalType.USER: ["username", "email"]},
        )

        assert await directory.resolve(PrincipalType.USER, "x@y.z") == "found-by-email"
        assert [c.args for c in store.find_one.await_args_list] == [
            ("username", "x@y.z"),
            ("email", "x@y.z"),
        ]

    @pytest.mark.asyncio
    async def test_primary_id_wins(self):
        store = AsyncMock()
        store.get.return_value = "found-by-id"
        directory = PrincipalDirectory(
            _stores=PrincipalStores({PrincipalType.USER: store}),
            _alternate_keys={PrincipalType.USER: ["username"]},
        )

        assert await directory.resolve(PrincipalType.USER, 1) == "found-by-id"
        store.find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self):
        store = AsyncMock()
        store.get.side_effect = ConnectionError("user store down")
        directory = PrincipalDirectory(
            _stores=PrincipalStores({PrincipalType.USER: store}),
            _alternate_keys={},
        )

        with pytest.raises(ConnectionError):
            await directory.resolve(PrincipalType.USER, "john")

    @pytest.mark.asyncio
    async def test_missing_store_is_configuration_error(self):
        directory = PrincipalDirectory(_stores=PrincipalStores({}), _alternate_keys={})

        with pytest.raises(ConfigurationError):
            await directory.resolve(PrincipalType.APPLICATION, "demo")


class TestAccessControl:
    """Tests for the AccessControl facade."""

    @pytest.mark.asyncio
    async def test_resolve_principal(self, acl: AccessControl, people):
        john = people["john"]

        assert await acl.resolve_principal(PrincipalType.USER, "john") == john
        assert await acl.resolve_principal(PrincipalType.USER, "john@doe.com") == john
        assert await acl.resolve_principal(PrincipalType.USER, john.id) == john

    @pytest.mark.asyncio
    async def test_is_mapped_to_role(self, acl: AccessControl, people):
        assert await acl.is_mapped_to_role(PrincipalType.USER, "john", "admin")
        assert not await acl.is_mapped_to_role(PrincipalType.USER, "mary", "admin")

    @pytest.mark.asyncio
    async def test_is_mapped_to_role_by_email(self, acl: AccessControl, people):
        assert await acl.is_mapped_to_role(PrincipalType.USER, "john@doe.com", "admin")

    @pytest.mark.asyncio
    async def test_is_mapped_to_role_unknown_principal(self, acl: AccessControl, people):
        assert not await acl.is_mapped_to_role(PrincipalType.USER, "nobody", "admin")
        assert not await acl.is_mapped_to_role(PrincipalType.USER, "nobody", EVERYONE)

    @pytest.mark.asyncio
    async def test_is_mapped_to_builtin_role(self, acl: AccessControl, people):
        assert await acl.is_mapped_to_role(PrincipalType.APPLICATION, "demo", AUTHENTICATED)

    @pytest.mark.asyncio
    async def test_is_owner(self, acl: AccessControl, model_registry, people):
        albums = InMemoryRecordStore(Album)
        model_registry.register(Album, albums, belongs_to={"user_id": PrincipalType.USER})
        album = await albums.create(user_id=people["john"].id)

        assert await acl.is_owner(Album, album.id, people["john"].id)
        assert not await acl.is_owner(Album, album.id, people["mary"].id)

    @pytest.mark.asyncio
    async def test_get_roles(self, acl: AccessControl, people):
        roles = await acl.get_roles(ResolutionContext(PrincipalType.USER, people["john"].id))

        assert set(roles) == {EVERYONE, AUTHENTICATED, str(people["admin"].id)}

    @pytest.mark.asyncio
    async def test_registered_resolver_is_used(self, acl: AccessControl, people):
        acl.register_resolver("staff", lambda role, context: context.principal_id == 2)

        assert await acl.is_in_role("staff", ResolutionContext(PrincipalType.USER, 2))
        assert await acl.is_mapped_to_role(PrincipalType.USER, "mary", "staff")
        assert not await acl.is_mapped_to_role(PrincipalType.USER, "john", "staff")
