"""
Token Issuer/Verifier

Issues and consumes single-use tokens for email verification and password
reset. Runs inside the caller's unit of work; the caller commits.
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable

from src.app.repositories.verification_token_repository import IVerificationTokenRepository
from src.domain.base import utc_now
from src.domain.entities import TokenSubject, VerificationToken
from src.domain.errors import ErrorCode
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

VERIFICATION_TOKEN_TTL = timedelta(hours=24)
PASSWORD_RESET_TOKEN_TTL = timedelta(hours=1)

TOKEN_BYTES = 32  # 256 bits, 64 hex chars


def hash_token(secret: str) -> str:
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


class TokenService:
    """
    Business Rules:
    - Secrets are 64-char hex strings from a CSPRNG; only SHA-256 is stored
    - Issuing never invalidates earlier tokens for the same subject
    - Consuming deletes the row, whether the token turns out valid or expired
    - "Never issued" and "already used" both report TOKEN_NOT_FOUND
    """

    def __init__(
        self,
        tokens: IVerificationTokenRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.tokens = tokens
        self.clock = clock

    async def issue(self, subject: TokenSubject, ttl: timedelta) -> str:
        secret = secrets.token_hex(TOKEN_BYTES)
        await self.tokens.create(
            VerificationToken(
                purpose=subject.purpose,
                identifier=subject.email,
                token_hash=hash_token(secret),
                expires=self.clock() + ttl,
            )
        )
        logger.debug("Issued %s token for %s", subject.purpose.value, subject.email)
        return secret

    async def consume(self, subject: TokenSubject, secret: str) -> Result[None]:
        token = await self.tokens.consume(subject, hash_token(secret))

        if token is None:
            return Return.err(
                Error(ErrorCode.TOKEN_NOT_FOUND, "Invalid or expired token")
            )

        if token.is_expired(self.clock()):
            return Return.err(Error(ErrorCode.TOKEN_EXPIRED, "Token has expired"))

        return Return.ok(None)


def describe_ttl(ttl: timedelta) -> str:
    """Human wording for email copy, e.g. "24 hours", "1 hour", "30 minutes" """
    hours = int(ttl.total_seconds() // 3600)
    if hours >= 1:
        return "1 hour" if hours == 1 else f"{hours} hours"
    minutes = max(1, int(ttl.total_seconds() // 60))
    return f"{minutes} minutes"
