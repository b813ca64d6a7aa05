from src.domain.errors import ErrorCode
from src.libs.result import Error, Result, Return

MIN_PASSWORD_LENGTH = 8


def validate_password(password: str) -> Result[None]:
    """
    Validate password complexity.

    Only the minimum length is enforced. Bytes past 72 are ignored by the
    hasher.
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                ErrorCode.INVALID_PASSWORD,
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )
        )
    return Return.ok(None)
