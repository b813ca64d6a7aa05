"""
Unit tests for ListUsersUseCase
"""
import pytest

from src.app.use_cases.users import ListUsersUseCase
from src.domain.base import utc_now
from src.domain.entities import User, UserRole


@pytest.mark.asyncio
async def test_list_users_projects_public_fields(mock_uow):
    admin = User(email="admin@x.com", password_hash="hash", role=UserRole.ADMIN, email_verified=utc_now())
    member = User(email="member@x.com", password_hash="hash")
    mock_uow.users.list_all.return_value = [member, admin]

    result = await ListUsersUseCase(mock_uow).execute()

    assert result.is_ok()
    assert [u.email for u in result.value] == ["member@x.com", "admin@x.com"]
    assert result.value[1].role == "ADMIN"
    assert result.value[0].email_verified is None
    assert "password_hash" not in result.value[0].model_dump()
