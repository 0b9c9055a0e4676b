"""Unit tests for OWNER resolution."""

from typing import ClassVar
from unittest.mock import AsyncMock, MagicMock

import pytest

from gatehouse.domain.access.model import OWNER, PrincipalType, ResolutionContext, User
from gatehouse.domain.access.service import ResolverRegistry, RoleResolver
from gatehouse.domain.access.service.builtin import OwnerResolver, bind_model_registry
from gatehouse.domain.shared.error import ConfigurationError
from gatehouse.domain.shared.model.entity import Entity
from gatehouse.infrastructure.memory import InMemoryModelRegistry, InMemoryRecordStore


class Album(Entity):
    """Belongs to a user twice: as uploader and as customer."""

    __belongs_to__: ClassVar[dict[str, PrincipalType]] = {
        "user_id": PrincipalType.USER,
        "customer_id": PrincipalType.USER,
        "app_id": PrincipalType.APPLICATION,
    }

    id: int | None = None
    title: str = "untitled"
    user_id: int | None = None
    customer_id: int | None = None
    app_id: int | None = None


class Note(Entity):
    """Declares no relations; ownership falls back to conventional keys."""

    id: int | None = None
    owner_id: int | str | None = None


def owner_context(principal_id, model_class, model_id, principal_type=PrincipalType.USER):
    return ResolutionContext(
        principal_type=principal_type,
        principal_id=principal_id,
        model_class=model_class,
        model_id=model_id,
    )


@pytest.fixture
def albums(model_registry: InMemoryModelRegistry) -> InMemoryRecordStore[Album]:
    store = InMemoryRecordStore(Album)
    model_registry.register(Album, store)
    return store


@pytest.fixture
def notes(model_registry: InMemoryModelRegistry) -> InMemoryRecordStore[Note]:
    store = InMemoryRecordStore(Note)
    model_registry.register(Note, store)
    return store


class TestOwnerResolution:
    """Tests for the OWNER built-in through RoleResolver.is_in_role."""

    @pytest.mark.asyncio
    async def test_either_foreign_key_grants_ownership(self, resolver: RoleResolver, albums):
        album = await albums.create(user_id=1, customer_id=2)

        assert await resolver.is_in_role(OWNER, owner_context(1, Album, album.id))
        assert await resolver.is_in_role(OWNER, owner_context(2, Album, album.id))
        assert not await resolver.is_in_role(OWNER, owner_context(3, Album, album.id))

    @pytest.mark.asyncio
    async def test_no_foreign_key_set(self, resolver: RoleResolver, albums):
        album = await albums.create(title="orphan")

        assert not await resolver.is_in_role(OWNER, owner_context(1, Album, album.id))

    @pytest.mark.asyncio
    async def test_loose_id_equality(self, resolver: RoleResolver, albums):
        album = await albums.create(customer_id=5)

        assert await resolver.is_in_role(OWNER, owner_context("5", Album, str(album.id)))

    @pytest.mark.asyncio
    async def test_only_keys_to_context_principal_type(self, resolver: RoleResolver, albums):
        album = await albums.create(app_id=9)

        assert not await resolver.is_in_role(OWNER, owner_context(9, Album, album.id))
        assert await resolver.is_in_role(
            OWNER, owner_context(9, Album, album.id, principal_type=PrincipalType.APPLICATION)
        )

    @pytest.mark.asyncio
    async def test_missing_entity_is_false(self, resolver: RoleResolver, albums):
        assert not await resolver.is_in_role(OWNER, owner_context(1, Album, 404))

    @pytest.mark.asyncio
    async def test_unregistered_model_is_false(self, resolver: RoleResolver):
        class Unknown:
            pass

        assert not await resolver.is_in_role(OWNER, owner_context(1, Unknown, 1))

    @pytest.mark.asyncio
    async def test_without_model_target_is_false(self, resolver: RoleResolver):
        assert not await resolver.is_in_role(OWNER, ResolutionContext(PrincipalType.USER, 1))
        assert not await resolver.is_in_role(OWNER, owner_context(1, Album, None))

    @pytest.mark.asyncio
    async def test_anonymous_never_owns(self, resolver: RoleResolver, albums):
        album = await albums.create(user_id=1)

        assert not await resolver.is_in_role(OWNER, owner_context(None, Album, album.id))

    @pytest.mark.asyncio
    async def test_user_owns_own_record(self, resolver: RoleResolver, users):
        user = await users.create(username="john")

        assert await resolver.is_in_role(OWNER, owner_context(user.id, User, user.id))
        assert not await resolver.is_in_role(OWNER, owner_context(user.id + 1, User, user.id))

    @pytest.mark.asyncio
    async def test_fallback_owner_key(self, resolver: RoleResolver, notes):
        note = await notes.create(owner_id=4)

        assert await resolver.is_in_role(OWNER, owner_context(4, Note, note.id))
        assert not await resolver.is_in_role(
            OWNER, owner_context(4, Note, note.id, principal_type=PrincipalType.APPLICATION)
        )

    @pytest.mark.asyncio
    async def test_reads_through_resolver_model_registry(
        self, role_repo, mapping_repo, model_registry, albums
    ):
        resolver = RoleResolver(
            _registry=ResolverRegistry.with_builtins(),
            _role_repo=role_repo,
            _mapping_repo=mapping_repo,
            _model_registry=model_registry,
        )
        album = await albums.create(user_id=1)

        assert await resolver.is_in_role(OWNER, owner_context(1, Album, album.id))


class TestOwnerResolverDirect:
    """OwnerResolver against a mocked ModelRegistry."""

    @pytest.mark.asyncio
    async def test_reads_mapping_entities(self):
        models = MagicMock()
        models.model_for.return_value = None
        models.get_model = AsyncMock(return_value={"id": 1, "author_id": "7"})
        models.belongs_to.return_value = ["author_id"]
        owner = OwnerResolver(models)

        assert await owner(OWNER, owner_context(7, "posts", 1))
        models.belongs_to.assert_called_once_with("posts", PrincipalType.USER)

    @pytest.mark.asyncio
    async def test_model_store_failure_propagates(self):
        models = MagicMock()
        models.model_for.return_value = None
        models.get_model = AsyncMock(side_effect=ConnectionError("model store down"))
        owner = OwnerResolver(models)

        with pytest.raises(ConnectionError):
            await owner(OWNER, owner_context(7, "posts", 1))

    @pytest.mark.asyncio
    async def test_bound_registry_wins_over_default(self):
        default = MagicMock()
        bound = MagicMock()
        bound.model_for.return_value = None
        bound.get_model = AsyncMock(return_value={"id": 1, "owner_id": 7})
        bound.belongs_to.return_value = []
        owner = OwnerResolver(default)

        with bind_model_registry(bound):
            assert await owner(OWNER, owner_context(7, "notes", 1))

        bound.get_model.assert_awaited_once_with("notes", 1)
        default.get_model.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_registry_is_configuration_error(self):
        owner = OwnerResolver()

        with pytest.raises(ConfigurationError):
            await owner(OWNER, owner_context(7, "notes", 1))
