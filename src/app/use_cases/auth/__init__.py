"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .register_dto import RegisterCommand, RegisterResponse, PublicUser
from .authenticate_use_case import AuthenticateUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    VerifyEmailResponse,
    ResendVerificationResponse,
    RequestPasswordResetResponse,
    ResetPasswordResponse,
    Identity,
    LoginResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "AuthenticateUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "VerifyEmailResponse",
    "ResendVerificationResponse",
    "RequestPasswordResetResponse",
    "ResetPasswordResponse",
    "LoginResponse",
    # DTOs - Nested Models
    "PublicUser",
    "Identity",
]
