import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.password_hasher import PasswordHasher


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.list_all = AsyncMock(return_value=[])

    uow.verification_tokens = MagicMock()
    uow.verification_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.verification_tokens.get = AsyncMock(return_value=None)
    uow.verification_tokens.consume = AsyncMock(return_value=None)

    uow.audit_events = MagicMock()
    uow.audit_events.append = AsyncMock()
    return uow


@pytest.fixture(scope="session")
def password_hasher():
    # Minimum bcrypt cost keeps the suite fast
    return PasswordHasher(rounds=4)
