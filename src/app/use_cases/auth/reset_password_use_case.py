"""
Reset Password Use Case

Applies a new password with a single-use reset token.
"""

from src.app.services.events import AuditRecorded
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import TokenSubject
from src.domain.errors import ErrorCode
from src.libs.result import Error, Result, Return
from .dtos import ResetPasswordResponse
from .password_policy import validate_password


class ResetPasswordUseCase:
    """
    Use case for resetting a password.

    Business Rules:
    - New password must meet complexity requirements (min 8 chars)
    - Token is looked up under the email's password-reset subject
    - Token is deleted on use and on expiry
    - Password is re-hashed with bcrypt and overwritten
    """

    def __init__(self, uow: UnitOfWork, password_hasher: PasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(
        self, email: str, token: str, new_password: str
    ) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            email: Address the reset link was sent to
            token: Password reset token (plain text from email)
            new_password: New password to set

        Errors:
            - TOKEN_NOT_FOUND: Token never issued, already used, or user gone
            - TOKEN_EXPIRED: Token has expired
            - INVALID_PASSWORD: Password does not meet complexity requirements
        """
        email = normalize_email(email)

        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            tokens = TokenService(self.uow.verification_tokens)
            consumed = await tokens.consume(TokenSubject.password_reset(email), token)
            if consumed.is_err():
                await self.uow.commit()
                return Return.err(consumed.error)

            user = await self.uow.users.get_by_email(email)
            if user is None:
                await self.uow.commit()
                return Return.err(
                    Error(ErrorCode.TOKEN_NOT_FOUND, "Invalid or expired token")
                )

            user.password_hash = await self.password_hasher.hash(new_password)
            await self.uow.users.update(user)

            # Commit transaction
            await self.uow.commit()

            return Return.ok(
                ResetPasswordResponse(
                    status="success",
                    message="Password reset successfully! You can now sign in with your new password.",
                ),
                events=[
                    AuditRecorded(
                        action="PASSWORD_RESET_COMPLETED",
                        user_id=user.id,
                        fields={"email": email},
                    )
                ],
            )
