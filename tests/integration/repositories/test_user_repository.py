"""
Integration tests for UserRepository against SQLite
"""
import pytest

from src.adapter.repositories.user_repository import UserRepository
from src.app.repositories.user_repository import DuplicateEmailError
from src.domain.entities import User


@pytest.mark.asyncio
async def test_unique_index_rejects_second_user_with_same_email(session_factory):
    async with session_factory() as session:
        await UserRepository(session).create(User(email="dup@example.com", password_hash="x"))
        await session.commit()

    async with session_factory() as session:
        with pytest.raises(DuplicateEmailError) as exc_info:
            await UserRepository(session).create(User(email="dup@example.com", password_hash="y"))

    assert exc_info.value.email == "dup@example.com"


@pytest.mark.asyncio
async def test_list_all_returns_newest_first(session_factory):
    async with session_factory() as session:
        repo = UserRepository(session)
        await repo.create(User(email="first@example.com"))
        await repo.create(User(email="second@example.com"))
        await session.commit()

        users = await repo.list_all()

    assert [u.email for u in users] == ["second@example.com", "first@example.com"]
