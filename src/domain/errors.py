"""
Error taxonomy

Every expected failure of the account lifecycle is reported with one of these
codes. All of them are recoverable by the caller and map to 4xx responses,
except INTERNAL_ERROR.
"""


class ErrorCode:
    ALREADY_EXISTS = "ALREADY_EXISTS"
    TOKEN_NOT_FOUND = "TOKEN_NOT_FOUND"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    EMAIL_NOT_VERIFIED = "EMAIL_NOT_VERIFIED"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    RATE_LIMITED = "RATE_LIMITED"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Callers that present token failures to end users should not reveal
    # which of the two happened
    TOKEN_ERRORS = (TOKEN_NOT_FOUND, TOKEN_EXPIRED)
