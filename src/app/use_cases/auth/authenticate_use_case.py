"""
Authenticate Use Case

Turns an email/password pair into an Identity, enforcing the verification gate.
"""

from src.app.services.events import AuditRecorded
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.errors import ErrorCode
from src.libs.result import Error, Result, Return
from .dtos import Identity

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def _failure(email: str, reason: str, user_id=None) -> AuditRecorded:
    return AuditRecorded(
        action="AUTH_FAILURE",
        user_id=user_id,
        fields={"email": email, "reason": reason},
    )


class AuthenticateUseCase:
    """
    Use case for credential authentication.

    Business Rules:
    - Unknown email and password-less (federated) accounts fail the same way
    - A dummy bcrypt comparison runs when there is no hash to compare against
    - Unverified accounts fail with EMAIL_NOT_VERIFIED, never INVALID_CREDENTIALS
    - Every branch carries an audit event; the reason tag is not returned to callers
    """

    def __init__(self, uow: UnitOfWork, password_hasher: PasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(self, email: str, password: str) -> Result[Identity]:
        """
        Execute authenticate use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with Identity, or Error

        Errors:
            - INVALID_CREDENTIALS: Unknown email, no password, or wrong password
            - EMAIL_NOT_VERIFIED: Account exists but email is not verified
        """
        email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            return await self._decide(user, email, password)

    async def _decide(self, user, email: str, password: str) -> Result[Identity]:
        if user is None or not user.password_hash:
            await self.password_hasher.burn(password)
            return Return.err(
                Error(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE),
                events=[_failure(email, "user_not_found_or_no_password")],
            )

        if not user.is_verified:
            return Return.err(
                Error(
                    ErrorCode.EMAIL_NOT_VERIFIED,
                    "Please verify your email address before signing in",
                ),
                events=[_failure(email, "email_not_verified", user.id)],
            )

        password_valid = await self.password_hasher.verify(password, user.password_hash)
        if not password_valid:
            return Return.err(
                Error(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE),
                events=[_failure(email, "invalid_password", user.id)],
            )

        return Return.ok(
            Identity(
                id=str(user.id),
                email=user.email,
                name=user.name,
                role=user.role.value,
            ),
            events=[
                AuditRecorded(
                    action="AUTH_SUCCESS",
                    user_id=user.id,
                    fields={"email": email},
                )
            ],
        )
