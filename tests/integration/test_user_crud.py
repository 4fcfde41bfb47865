"""
Tests for UserCRUD email upsert.

System role: Verification of first-sight user creation
"""

from sqlalchemy import func, select

from auditscan.boundary.db.CRUD.user_crud import user_crud
from auditscan.boundary.db.models.user_model import UserModel


async def test_upsert_creates_then_updates(test_async_db):
    created = await user_crud.upsert_by_email(test_async_db, "ana@example.com", name="Ana")
    updated = await user_crud.upsert_by_email(
        test_async_db, "ana@example.com", name="Ana Maria", image="ana.png"
    )

    assert created.id == updated.id
    assert updated.name == "Ana Maria"
    assert updated.image == "ana.png"


async def test_upsert_ignores_empty_values(test_async_db):
    await user_crud.upsert_by_email(test_async_db, "bo@example.com", name="Bo", image="bo.png")

    user = await user_crud.upsert_by_email(test_async_db, "bo@example.com", name="", image=None)

    assert user.name == "Bo"
    assert user.image == "bo.png"


async def test_upsert_recovers_from_concurrent_insert(session_factory, monkeypatch):
    async with session_factory() as winner:
        await user_crud.create(winner, email="race@example.com", name="Winner")
        await winner.commit()

    async with session_factory() as loser:
        # Simulate the row being invisible at lookup time
        original_get = user_crud.get_by_email
        calls = []

        async def stale_first_lookup(session, email):
            calls.append(email)
            if len(calls) == 1:
                return None
            return await original_get(session, email)

        monkeypatch.setattr(user_crud, "get_by_email", stale_first_lookup)

        user = await user_crud.upsert_by_email(loser, "race@example.com", name="Loser")
        await loser.commit()

        count = await loser.execute(select(func.count(UserModel.id)))
        assert count.scalar_one() == 1
        assert user.name == "Loser"
        assert len(calls) == 2
