from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.jwt import create_access_token
from src.api.utils.rate_limit import rate_limit
from src.api.utils.rbac import require_auth
from src.app.services.event_dispatcher import EventDispatcher
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    AuthenticateUseCase,
    VerifyEmailUseCase,
    ResendVerificationUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    Identity,
    LoginResponse,
    VerifyEmailResponse,
    ResendVerificationResponse,
    RequestPasswordResetResponse,
    ResetPasswordResponse,
)
from src.depends import get_event_dispatcher, get_password_hasher, get_unit_of_work
from src.domain.errors import ErrorCode
from src.libs.result import Error, Result

router = APIRouter(prefix="/auth", tags=["Authentication"])

VERIFICATION_TTL = timedelta(hours=ApplicationConfig.VERIFICATION_TOKEN_TTL_HOURS)
PASSWORD_RESET_TTL = timedelta(hours=ApplicationConfig.PASSWORD_RESET_TOKEN_TTL_HOURS)

TOKEN_ERROR_MESSAGE = "Invalid or expired token"

# Token failures share one status and one message
TOKEN_ERROR_STATUS = {
    ErrorCode.TOKEN_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PASSWORD: status.HTTP_400_BAD_REQUEST,
}


async def publish(
    result: Result, background_tasks: BackgroundTasks, dispatcher: EventDispatcher
) -> None:
    """
    Hand the use case's post-commit events to the dispatcher.

    Successful responses deliver in the background. Failures are about to be
    raised, and background tasks do not run for an exception response, so
    their events (audit entries) are delivered before raising.
    """
    if not result.events:
        return
    if result.is_ok():
        background_tasks.add_task(dispatcher.dispatch, result.events)
    else:
        await dispatcher.dispatch(result.events)


def raise_for_error(result: Result, status_map: dict) -> None:
    error = result.error
    if error.code in ErrorCode.TOKEN_ERRORS:
        error = Error(error.code, TOKEN_ERROR_MESSAGE)
    if error.code in status_map:
        raise ClientError(error, status_code=status_map[error.code])
    raise ServerError(error)


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    Password strength is a business rule checked by the use case.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password (min 8 chars)")
    name: Optional[str] = Field(None, max_length=255, description="Display name")


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
    dependencies=[Depends(rate_limit("auth"))],
)
async def register(
    request: RegisterRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
):
    """
    User Registration

    Creates an unverified account and emails a verification link.
    The email is sent after the response; a failed delivery does not undo
    the registration.

    Raises:
        - 400 Bad Request: Password too weak
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 429 Too Many Requests: Rate limit exceeded
    """
    command = RegisterCommand(
        email=request.email, password=request.password, name=request.name
    )

    use_case = RegisterUseCase(uow, password_hasher, verification_ttl=VERIFICATION_TTL)
    result = await use_case.execute(command)
    await publish(result, background_tasks, dispatcher)

    if result.is_err():
        raise_for_error(
            result,
            {
                ErrorCode.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
                ErrorCode.INVALID_PASSWORD: status.HTTP_400_BAD_REQUEST,
            },
        )

    return RegisterResponse(
        message="Registration successful! Please check your email to verify your account.",
        user=result.value,
    )


class VerifyEmailRequest(BaseModel):
    email: EmailStr = Field(..., description="Address the link was sent to")
    token: str = Field(..., min_length=1, description="Verification token from email")


@router.post(
    "/verify-email",
    status_code=status.HTTP_200_OK,
    response_model=VerifyEmailResponse,
    dependencies=[Depends(rate_limit("auth"))],
)
async def verify_email(
    request: VerifyEmailRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
):
    """
    Verify Email

    Consumes the verification token and marks the email verified.

    Raises:
        - 400 Bad Request: Token invalid, already used, or expired
    """
    use_case = VerifyEmailUseCase(uow)
    result = await use_case.execute(request.email, request.token)
    await publish(result, background_tasks, dispatcher)

    if result.is_err():
        raise_for_error(result, TOKEN_ERROR_STATUS)

    return result.value


class ResendVerificationRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/resend-verification",
    status_code=status.HTTP_200_OK,
    response_model=ResendVerificationResponse,
    dependencies=[Depends(rate_limit("auth"))],
)
async def resend_verification(
    request: ResendVerificationRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
):
    """
    Resend Verification Email

    Issues a fresh verification token for an unverified account.
    Unknown emails get the same response as unverified ones.
    """
    use_case = ResendVerificationUseCase(uow, verification_ttl=VERIFICATION_TTL)
    result = await use_case.execute(request.email)
    await publish(result, background_tasks, dispatcher)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    dependencies=[Depends(rate_limit("auth"))],
)
async def forgot_password(
    request: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
):
    """
    Request Password Reset

    Always answers the same way whether or not the account exists.
    """
    use_case = RequestPasswordResetUseCase(uow, reset_ttl=PASSWORD_RESET_TTL)
    result = await use_case.execute(request.email)
    await publish(result, background_tasks, dispatcher)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="Address the link was sent to")
    token: str = Field(..., min_length=1, description="Password reset token from email")
    password: str = Field(..., description="New password (min 8 chars)")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ResetPasswordResponse,
    dependencies=[Depends(rate_limit("auth"))],
)
async def reset_password(
    request: ResetPasswordRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
):
    """
    Reset Password

    Raises:
        - 400 Bad Request: Token invalid, used or expired; password too weak
    """
    use_case = ResetPasswordUseCase(uow, password_hasher)
    result = await use_case.execute(request.email, request.token, request.password)
    await publish(result, background_tasks, dispatcher)

    if result.is_err():
        raise_for_error(result, TOKEN_ERROR_STATUS)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=LoginResponse,
    dependencies=[Depends(rate_limit("auth"))],
)
async def login(
    request: LoginRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
):
    """
    User Login

    Authenticates the user and returns a signed access token.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Email not verified
    """
    use_case = AuthenticateUseCase(uow, password_hasher)
    result = await use_case.execute(request.email, request.password)
    await publish(result, background_tasks, dispatcher)

    if result.is_err():
        raise_for_error(
            result,
            {
                ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
                ErrorCode.EMAIL_NOT_VERIFIED: status.HTTP_403_FORBIDDEN,
            },
        )

    identity = result.value
    return LoginResponse(
        access_token=create_access_token(identity),
        expires_in=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=identity,
    )


@router.get("/me", status_code=status.HTTP_200_OK, response_model=Identity)
async def me(identity: Identity = Depends(require_auth)):
    """
    Current Identity

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token
    """
    return identity
