"""
Trazure Backend — Repository Tests
====================================

What:  Lookups by id against the SQLite test database.
"""

import pytest

from trazure.database import async_session_factory
from trazure.models import Footprint, User
from trazure.models.user import MAX_ID
from trazure.repositories import FootprintRepository, UserRepository


class TestUserRepository:

    @pytest.mark.asyncio
    async def test_find_active_user(self, seeded_users):
        async with async_session_factory() as session:
            user = await UserRepository(session).find_by_id(2)

        assert user is not None
        assert user.username == "rose"

    @pytest.mark.asyncio
    async def test_soft_deleted_user_is_absent(self, seeded_users):
        async with async_session_factory() as session:
            assert await UserRepository(session).find_by_id(3) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", [404, 0, -1, MAX_ID + 1])
    async def test_unknown_user_is_none(self, seeded_users, user_id):
        async with async_session_factory() as session:
            assert await UserRepository(session).find_by_id(user_id) is None


class TestFootprintRepository:

    @pytest.mark.asyncio
    async def test_insert_then_find(self, seeded_users):
        async with async_session_factory() as session:
            repo = FootprintRepository(session)
            created = await repo.insert(Footprint(user_id=1, latitude=31.23, longitude=121.47))
            found = await repo.find_by_id(created.id)

        assert found is not None
        assert found.user_id == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("footprint_id", [0, -7, MAX_ID + 1, 10**20])
    async def test_out_of_range_id_is_none(self, seeded_users, footprint_id):
        async with async_session_factory() as session:
            assert await FootprintRepository(session).find_by_id(footprint_id) is None


class TestRelationships:

    def test_relationships_never_load_implicitly(self):
        assert User.footprints.property.lazy == "raise"
        assert Footprint.owner.property.lazy == "raise"
