from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.audit_sink import DatabaseAuditSink, LoggingAuditSink
from src.adapter.services.mailer import ConsoleMailer, SmtpMailer
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import identity_from_token
from src.app.services.event_dispatcher import EventDispatcher
from src.app.services.password_hasher import PasswordHasher
from src.app.use_cases.auth.dtos import Identity

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def build_mailer():
    if ApplicationConfig.MAIL_BACKEND == "smtp":
        return SmtpMailer(
            host=ApplicationConfig.SMTP_HOST,
            port=ApplicationConfig.SMTP_PORT,
            sender=ApplicationConfig.SMTP_FROM,
            username=ApplicationConfig.SMTP_USER or None,
            password=ApplicationConfig.SMTP_PASSWORD or None,
            use_tls=ApplicationConfig.SMTP_USE_TLS,
        )
    return ConsoleMailer()


def build_audit_sink():
    if ApplicationConfig.AUDIT_BACKEND == "database":
        return DatabaseAuditSink(AsyncSessionLocal)
    return LoggingAuditSink()


@lru_cache
def get_event_dispatcher() -> EventDispatcher:
    return EventDispatcher(
        mailer=build_mailer(),
        audit_sink=build_audit_sink(),
        app_url=ApplicationConfig.APP_URL,
    )


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Identity]:
    """
    Decode the bearer token from the Authorization header.

    Returns:
        Identity from the token claims, or None when the header is missing
        or the token is invalid or expired
    """
    if credentials is None:
        return None
    return identity_from_token(credentials.credentials)
