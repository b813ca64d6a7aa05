"""
Resend Verification Email Use Case

Handles sending another email verification token.
"""

from datetime import timedelta

from src.app.services.events import VerificationEmailRequested
from src.app.services.token_service import VERIFICATION_TOKEN_TTL, TokenService, describe_ttl
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import TokenSubject
from src.libs.result import Result, Return
from .dtos import ResendVerificationResponse

SENT_MESSAGE = "If the email exists, a verification link has been sent"


class ResendVerificationUseCase:
    """
    Use case for resending email verification.

    Business Rules:
    - If email is not verified, issue a new 24 hour token
    - Earlier tokens are not invalidated; any outstanding one still works
    - If email is already verified, no token is issued and no email is sent
    - Same response for unknown, unverified and verified emails (no enumeration)
    """

    def __init__(self, uow: UnitOfWork, verification_ttl: timedelta = VERIFICATION_TOKEN_TTL):
        self.uow = uow
        self.verification_ttl = verification_ttl

    async def execute(self, email: str) -> Result[ResendVerificationResponse]:
        email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None or user.is_verified:
                return Return.ok(ResendVerificationResponse(status="sent", message=SENT_MESSAGE))

            tokens = TokenService(self.uow.verification_tokens)
            token = await tokens.issue(TokenSubject.verification(email), self.verification_ttl)

            await self.uow.commit()

            return Return.ok(
                ResendVerificationResponse(status="sent", message=SENT_MESSAGE),
                events=[
                    VerificationEmailRequested(
                        email=email,
                        token=token,
                        expires_in=describe_ttl(self.verification_ttl),
                    )
                ],
            )
