"""
Request Password Reset Use Case

Handles generating password reset tokens.
"""

from datetime import timedelta

from src.app.services.events import AuditRecorded, PasswordResetEmailRequested
from src.app.services.token_service import PASSWORD_RESET_TOKEN_TTL, TokenService, describe_ttl
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import TokenSubject
from src.libs.result import Result, Return
from .dtos import RequestPasswordResetResponse

RESET_REQUESTED_MESSAGE = (
    "If an account with that email exists, we've sent password reset instructions."
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Token expires in 1 hour
    - Earlier reset tokens stay valid until used or expired
    - No email enumeration (same response for known and unknown emails)
    - The reset email goes out after commit, outside the response path
    """

    def __init__(self, uow: UnitOfWork, reset_ttl: timedelta = PASSWORD_RESET_TOKEN_TTL):
        self.uow = uow
        self.reset_ttl = reset_ttl

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with reset status; never an Error for unknown emails
        """
        email = normalize_email(email)
        response = RequestPasswordResetResponse(status="sent", message=RESET_REQUESTED_MESSAGE)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(response)

            tokens = TokenService(self.uow.verification_tokens)
            token = await tokens.issue(TokenSubject.password_reset(email), self.reset_ttl)

            # Commit transaction
            await self.uow.commit()

            return Return.ok(
                response,
                events=[
                    PasswordResetEmailRequested(
                        email=email,
                        token=token,
                        expires_in=describe_ttl(self.reset_ttl),
                    ),
                    AuditRecorded(
                        action="PASSWORD_RESET_REQUESTED",
                        user_id=user.id,
                        fields={"email": email},
                    ),
                ],
            )
