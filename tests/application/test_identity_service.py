"""
Tests for IdentityService.

Runs against a file-backed SQLite database.

System role: Verification of session to user id resolution
"""

import uuid

import pytest
from sqlalchemy import func, select

from auditscan.application.services.identity_service import IdentityService
from auditscan.boundary.db.models.user_model import UserModel
from auditscan.core.exceptions import IdentityError, UnauthorizedError
from auditscan.models.identity import SessionIdentity


async def _user_count(session) -> int:
    result = await session.execute(select(func.count(UserModel.id)))
    return result.scalar_one()


class TestResolveById:

    async def test_existing_id_is_returned(self, test_async_db, make_user):
        user = await make_user(email="known@example.com")
        service = IdentityService(test_async_db)

        resolved = await service.resolve(SessionIdentity(user_id=str(user.id)))

        assert resolved == user.id

    async def test_existing_id_wins_over_email(self, test_async_db, make_user):
        user = await make_user(email="first@example.com")
        service = IdentityService(test_async_db)

        resolved = await service.resolve(
            SessionIdentity(user_id=str(user.id), email="other@example.com")
        )

        assert resolved == user.id
        assert await _user_count(test_async_db) == 1

    async def test_stale_id_without_email_raises_identity_error(self, test_async_db):
        service = IdentityService(test_async_db)

        with pytest.raises(IdentityError):
            await service.resolve(SessionIdentity(user_id=str(uuid.uuid4())))

    async def test_malformed_id_falls_back_to_email(self, test_async_db):
        service = IdentityService(test_async_db)

        resolved = await service.resolve(
            SessionIdentity(user_id="not-a-uuid", email="fallback@example.com")
        )

        user = await test_async_db.get(UserModel, resolved)
        assert user.email == "fallback@example.com"


class TestResolveByEmail:

    async def test_first_sight_creates_user(self, test_async_db):
        service = IdentityService(test_async_db)

        resolved = await service.resolve(
            SessionIdentity(email="new@example.com", name="New User", image="avatar.png")
        )

        user = await test_async_db.get(UserModel, resolved)
        assert user.email == "new@example.com"
        assert user.name == "New User"
        assert user.image == "avatar.png"

    async def test_same_session_twice_yields_same_id(self, test_async_db):
        service = IdentityService(test_async_db)
        identity = SessionIdentity(email="repeat@example.com", name="Repeat")

        first = await service.resolve(identity)
        second = await service.resolve(identity)

        assert first == second
        assert await _user_count(test_async_db) == 1

    async def test_stale_id_with_email_upserts(self, test_async_db, make_user):
        user = await make_user(email="stale@example.com", name="Old Name")
        service = IdentityService(test_async_db)

        resolved = await service.resolve(
            SessionIdentity(user_id=str(uuid.uuid4()), email="stale@example.com", name="New Name")
        )

        assert resolved == user.id
        refreshed = await test_async_db.get(UserModel, user.id)
        assert refreshed.name == "New Name"

    async def test_empty_name_keeps_stored_name(self, test_async_db, make_user):
        user = await make_user(email="keep@example.com", name="Stored Name")
        service = IdentityService(test_async_db)

        await service.resolve(SessionIdentity(email="keep@example.com", name=""))

        refreshed = await test_async_db.get(UserModel, user.id)
        assert refreshed.name == "Stored Name"


async def test_session_without_id_or_email_is_unauthorized(test_async_db):
    service = IdentityService(test_async_db)

    with pytest.raises(UnauthorizedError):
        await service.resolve(SessionIdentity(name="Anonymous"))

    assert await _user_count(test_async_db) == 0
