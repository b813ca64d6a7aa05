"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional
from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class VerifyEmailResponse(BaseModel):
    """Response for email verification use case"""

    status: str
    message: str


class ResendVerificationResponse(BaseModel):
    """Response for resend verification email use case"""

    status: str
    message: str


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    status: str
    message: str


class Identity(BaseModel):
    """Authenticated user as seen by authorization checks"""

    id: str
    email: str
    name: Optional[str] = None
    role: str


class LoginResponse(BaseModel):
    """Response for user login: session token plus identity"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: Identity
