"""
Tests for RoleStore.
"""

import pytest

from identity_store.core.exceptions import (
    ConcurrencyConflictError,
    ConflictError,
    NotFoundError,
)
from identity_store.models import Claim


class TestRoleStoreCrud:
    """Tests for role persistence."""

    @pytest.mark.asyncio
    async def test_create_and_find_by_id(self, role_store, role_factory):
        role = await role_store.create(role_factory(name="Admin"))

        found = await role_store.find_by_id(role.id)

        assert found.name == "Admin"
        assert found.normalized_name == "ADMIN"
        assert found.version_token == role.version_token

    @pytest.mark.asyncio
    async def test_create_assigns_missing_id(self, role_store, role_factory):
        role = await role_store.create(role_factory(id=None))

        assert role.id is not None
        assert (await role_store.find_by_id(role.id)).id == role.id

    @pytest.mark.asyncio
    async def test_create_duplicate_id_raises_conflict(self, role_store, role_factory):
        role = await role_store.create(role_factory())

        with pytest.raises(ConflictError):
            await role_store.create(role_factory(id=role.id))

    @pytest.mark.asyncio
    async def test_find_by_id_missing_raises(self, role_store):
        with pytest.raises(NotFoundError):
            await role_store.find_by_id("missing")

    @pytest.mark.asyncio
    async def test_update_changes_version_token(self, role_store, role_factory):
        role = await role_store.create(role_factory())
        original_token = role.version_token

        role_store.set_role_name(role, "Renamed")
        await role_store.update(role)

        assert role.version_token != original_token
        assert (await role_store.find_by_id(role.id)).name == "Renamed"

    @pytest.mark.asyncio
    async def test_update_with_stale_token_raises(self, role_store, role_factory):
        role = await role_store.create(role_factory())
        stale = await role_store.find_by_id(role.id)
        await role_store.update(role)

        with pytest.raises(ConcurrencyConflictError):
            await role_store.update(stale)

    @pytest.mark.asyncio
    async def test_delete_with_stale_token_raises(self, role_store, role_factory):
        role = await role_store.create(role_factory())
        stale = await role_store.find_by_id(role.id)
        await role_store.update(role)

        with pytest.raises(ConcurrencyConflictError):
            await role_store.delete(stale)

    @pytest.mark.asyncio
    async def test_delete_missing_raises(self, role_store, role_factory):
        role = await role_store.create(role_factory())
        await role_store.delete(role)

        with pytest.raises(NotFoundError):
            await role_store.delete(role)


class TestRoleLookups:
    """Tests for lookups by normalized name."""

    @pytest.mark.asyncio
    async def test_find_by_name(self, role_store, role_factory):
        await role_store.create(role_factory())
        target = await role_store.create(role_factory())
        await role_store.create(role_factory())

        found = await role_store.find_by_name(target.normalized_name)

        assert found.id == target.id

    @pytest.mark.asyncio
    async def test_find_by_name_uses_normalized_name_only(self, role_store, role_factory):
        await role_store.create(role_factory(name="Editor", normalized_name="EDITOR"))

        with pytest.raises(NotFoundError):
            await role_store.find_by_name("Editor")


class TestRoleClaims:
    """Tests for in-memory role claims."""

    @pytest.mark.asyncio
    async def test_claims_round_trip(self, role_store, role_factory):
        role = await role_store.create(role_factory())
        claim = Claim(type="permission", value="users.read")

        role_store.add_claim(role, claim)
        await role_store.update(role)

        stored = await role_store.find_by_id(role.id)
        assert role_store.get_claims(stored) == [claim]

    def test_remove_claim(self, role_store, role_factory):
        keep = Claim(type="permission", value="users.read")
        drop = Claim(type="permission", value="users.write")
        role = role_factory(claims=[keep, drop])

        role_store.remove_claim(role, drop)

        assert role.claims == [keep]

    def test_normalized_name_accessors(self, role_store, role_factory):
        role = role_factory()

        role_store.set_normalized_role_name(role, "X")

        assert role_store.get_normalized_role_name(role) == "X"
        assert role_store.get_role_id(role) == role.id
