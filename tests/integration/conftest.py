import re
from typing import Any, Dict, List, Optional
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.audit_sink import IAuditSink
from src.app.services.event_dispatcher import EventDispatcher
from src.app.services.mailer import IMailer
from src.app.services.password_hasher import PasswordHasher
from src.app.services.rate_limiter import load_presets
from src.domain.base import utc_now
from src.domain.entities import User, UserRole
from src.depends import (
    get_event_dispatcher,
    get_password_hasher,
    get_session,
    get_unit_of_work,
)

TEST_APP_URL = "http://app.test"

TOKEN_PATTERN = re.compile(r"token=([0-9a-f]{64})")


class RecordingMailer(IMailer):
    def __init__(self):
        self.sent: List[Dict[str, Any]] = []

    async def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})

    def last_token(self, to: str) -> str:
        """Secret from the most recent link mailed to an address"""
        for message in reversed(self.sent):
            if message["to"] == to:
                match = TOKEN_PATTERN.search(message["text"])
                if match:
                    return match.group(1)
        raise AssertionError(f"No token mailed to {to}")


class RecordingAuditSink(IAuditSink):
    def __init__(self):
        self.records: List[Dict[str, Any]] = []

    async def record(
        self, action: str, fields: Dict[str, Any], user_id: Optional[UUID] = None
    ) -> None:
        self.records.append({"action": action, "fields": fields, "user_id": user_id})

    def actions(self) -> List[str]:
        return [record["action"] for record in self.records]


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="session")
def password_hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def audit_sink():
    return RecordingAuditSink()


@pytest.fixture
def app(db_session, password_hasher, mailer, audit_sink):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)
    # Room for multi-step flows; rate limit tests install their own presets
    app.state.rate_limit_presets = load_presets({"auth": {"max_requests": 100}})

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    async def override_get_session():
        yield db_session

    dispatcher = EventDispatcher(mailer=mailer, audit_sink=audit_sink, app_url=TEST_APP_URL)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher
    app.dependency_overrides[get_event_dispatcher] = lambda: dispatcher
    return app


@pytest_asyncio.fixture
async def client(app):
    from httpx import ASGITransport

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_user(db_session, password_hasher):
    """Insert a user directly, bypassing registration"""

    async def _create_user(
        email: str = "user@example.com",
        password: Optional[str] = "Password123",
        verified: bool = True,
        role: UserRole = UserRole.USER,
        name: Optional[str] = "Test User",
    ) -> User:
        user = User(
            email=email,
            password_hash=await password_hasher.hash(password) if password else None,
            name=name,
            email_verified=utc_now() if verified else None,
            role=role,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _create_user
