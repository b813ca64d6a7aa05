"""
Verify Email Use Case

Handles email verification via single-use token.
"""

from src.app.services.events import AuditRecorded, WelcomeEmailRequested
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email, utc_now
from src.domain.entities import TokenSubject
from src.domain.errors import ErrorCode
from src.libs.result import Error, Result, Return
from .dtos import VerifyEmailResponse


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token is looked up under the email's verification subject
    - Token is deleted on use and on expiry (single-use, no replay)
    - Sets email_verified to the current time
    - Welcome email is best-effort and sent after commit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, token: str) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Args:
            email: Address the token was sent to
            token: Verification token from email link

        Returns:
            Result with verification status, or Error

        Errors:
            - TOKEN_NOT_FOUND: Token never issued, already used, or user gone
            - TOKEN_EXPIRED: Token has expired (>24 hours)
        """
        email = normalize_email(email)

        async with self.uow:
            tokens = TokenService(self.uow.verification_tokens)
            consumed = await tokens.consume(TokenSubject.verification(email), token)
            if consumed.is_err():
                # Expired rows were deleted on read; make that stick
                await self.uow.commit()
                return Return.err(consumed.error)

            user = await self.uow.users.get_by_email(email)
            if user is None:
                # Tokens outlive deleted accounts until they expire
                await self.uow.commit()
                return Return.err(
                    Error(ErrorCode.TOKEN_NOT_FOUND, "Invalid or expired token")
                )

            user.email_verified = utc_now()
            await self.uow.users.update(user)

            # Commit transaction
            await self.uow.commit()

            return Return.ok(
                VerifyEmailResponse(
                    status="verified",
                    message="Email verified successfully! You can now sign in to your account.",
                ),
                events=[
                    AuditRecorded(
                        action="EMAIL_VERIFIED",
                        user_id=user.id,
                        fields={"email": email},
                    ),
                    WelcomeEmailRequested(email=email, name=user.name),
                ],
            )
