from datetime import timedelta

from src.app.repositories.user_repository import DuplicateEmailError
from src.app.services.events import AuditRecorded, VerificationEmailRequested
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import VERIFICATION_TOKEN_TTL, TokenService, describe_ttl
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import TokenSubject, User
from src.domain.errors import ErrorCode
from src.libs.result import Error, Result, Return
from .password_policy import validate_password
from .register_dto import PublicUser, RegisterCommand


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[PublicUser] plus post-commit events

    Business Logic:
    1. Normalize email and validate password policy
    2. Check if email already exists (fast path only; the unique index decides races)
    3. Hash password with bcrypt
    4. Create User with email_verified=None
    5. Issue email verification token (24 hours)
    6. Commit, then hand back the verification email as an event

    The verification email is delivered after commit by the caller. A failed
    delivery does not undo the registration.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
        verification_ttl: timedelta = VERIFICATION_TOKEN_TTL,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.verification_ttl = verification_ttl

    async def execute(self, command: RegisterCommand) -> Result[PublicUser]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated email, password, optional name

        Returns:
            Result[PublicUser] with id, email and name
            or Error(ALREADY_EXISTS) if email exists
            or Error(INVALID_PASSWORD) if the password is too weak
        """
        email = normalize_email(command.email)

        password_validation = validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(
                    Error(ErrorCode.ALREADY_EXISTS, "User already exists")
                )

            password_hash = await self.password_hasher.hash(command.password)

            try:
                user = await self.uow.users.create(
                    User(
                        email=email,
                        password_hash=password_hash,
                        name=command.name,
                        email_verified=None,
                    )
                )
            except DuplicateEmailError:
                # Lost a race with a concurrent registration for the same email
                return Return.err(
                    Error(ErrorCode.ALREADY_EXISTS, "User already exists")
                )

            tokens = TokenService(self.uow.verification_tokens)
            token = await tokens.issue(TokenSubject.verification(email), self.verification_ttl)

            # Commit transaction atomically
            await self.uow.commit()

            return Return.ok(
                PublicUser(id=str(user.id), email=user.email, name=user.name),
                events=[
                    VerificationEmailRequested(
                        email=email,
                        token=token,
                        expires_in=describe_ttl(self.verification_ttl),
                    ),
                    AuditRecorded(
                        action="USER_REGISTERED",
                        user_id=user.id,
                        fields={"email": email},
                    ),
                ],
            )
