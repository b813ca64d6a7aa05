"""
Unit tests for TokenService

Uses a small in-memory repository so that consume's delete-on-read
behaviour can be observed across calls.
"""
from datetime import timedelta
from typing import Dict, Optional, Tuple

import pytest

from src.app.repositories.verification_token_repository import IVerificationTokenRepository
from src.app.services.token_service import TokenService, describe_ttl, hash_token
from src.domain.base import utc_now
from src.domain.entities import TokenSubject, VerificationToken
from src.domain.errors import ErrorCode


class InMemoryTokenRepository(IVerificationTokenRepository):
    def __init__(self):
        self.rows: Dict[Tuple, VerificationToken] = {}

    @staticmethod
    def _key(subject: TokenSubject, token_hash: str) -> Tuple:
        return (subject.purpose, subject.email, token_hash)

    async def create(self, token: VerificationToken) -> VerificationToken:
        self.rows[self._key(token.subject, token.token_hash)] = token
        return token

    async def get(self, subject: TokenSubject, token_hash: str) -> Optional[VerificationToken]:
        return self.rows.get(self._key(subject, token_hash))

    async def consume(self, subject: TokenSubject, token_hash: str) -> Optional[VerificationToken]:
        return self.rows.pop(self._key(subject, token_hash), None)


class FrozenClock:
    def __init__(self):
        self.now = utc_now()

    def __call__(self):
        return self.now

    def advance(self, delta: timedelta):
        self.now += delta


@pytest.fixture
def repo():
    return InMemoryTokenRepository()


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def service(repo, clock):
    return TokenService(repo, clock=clock)


@pytest.mark.asyncio
async def test_issue_returns_64_hex_chars_and_stores_only_digest(service, repo):
    subject = TokenSubject.verification("a@x.com")

    secret = await service.issue(subject, timedelta(hours=24))

    assert len(secret) == 64
    int(secret, 16)
    (row,) = repo.rows.values()
    assert row.token_hash == hash_token(secret)
    assert row.token_hash != secret


@pytest.mark.asyncio
async def test_issue_sets_expiry_from_ttl(service, repo, clock):
    await service.issue(TokenSubject.password_reset("a@x.com"), timedelta(hours=1))

    (row,) = repo.rows.values()
    assert row.expires == clock.now + timedelta(hours=1)


@pytest.mark.asyncio
async def test_consume_succeeds_exactly_once(service):
    subject = TokenSubject.verification("a@x.com")
    secret = await service.issue(subject, timedelta(hours=24))

    first = await service.consume(subject, secret)
    second = await service.consume(subject, secret)

    assert first.is_ok()
    assert second.is_err()
    assert second.error.code == ErrorCode.TOKEN_NOT_FOUND


@pytest.mark.asyncio
async def test_expired_token_fails_then_leaves_no_row(service, repo, clock):
    subject = TokenSubject.verification("a@x.com")
    secret = await service.issue(subject, timedelta(hours=24))
    clock.advance(timedelta(hours=24, seconds=1))

    expired = await service.consume(subject, secret)
    again = await service.consume(subject, secret)

    assert expired.error.code == ErrorCode.TOKEN_EXPIRED
    assert again.error.code == ErrorCode.TOKEN_NOT_FOUND
    assert repo.rows == {}


@pytest.mark.asyncio
async def test_never_issued_token_fails_token_not_found(service):
    result = await service.consume(TokenSubject.verification("a@x.com"), "0" * 64)

    assert result.error.code == ErrorCode.TOKEN_NOT_FOUND


@pytest.mark.asyncio
async def test_token_kinds_never_cross(service):
    secret = await service.issue(TokenSubject.verification("a@x.com"), timedelta(hours=24))

    as_reset = await service.consume(TokenSubject.password_reset("a@x.com"), secret)
    as_verification = await service.consume(TokenSubject.verification("a@x.com"), secret)

    assert as_reset.error.code == ErrorCode.TOKEN_NOT_FOUND
    assert as_verification.is_ok()


@pytest.mark.asyncio
async def test_reissue_keeps_earlier_tokens_valid(service):
    subject = TokenSubject.verification("a@x.com")
    first = await service.issue(subject, timedelta(hours=24))
    second = await service.issue(subject, timedelta(hours=24))

    assert first != second
    assert (await service.consume(subject, first)).is_ok()
    assert (await service.consume(subject, second)).is_ok()


@pytest.mark.parametrize(
    "ttl, expected",
    [
        (timedelta(hours=24), "24 hours"),
        (timedelta(hours=1), "1 hour"),
        (timedelta(minutes=30), "30 minutes"),
    ],
)
def test_describe_ttl(ttl, expected):
    assert describe_ttl(ttl) == expected
