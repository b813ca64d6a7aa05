"""
Use Cases

Organized into domain folders:
- auth/: Registration, verification, password reset, authentication
- users/: User administration
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    AuthenticateUseCase,
    VerifyEmailUseCase,
    ResendVerificationUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
)
from .users import ListUsersUseCase

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "AuthenticateUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    # Users
    "ListUsersUseCase",
]
