"""
Register Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- RegisterCommand: Input to use case (validated business intent)
- PublicUser: Output from use case (never carries the password hash)
"""

from typing import Optional
from pydantic import BaseModel


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    email: str
    password: str
    name: Optional[str] = None


class PublicUser(BaseModel):
    """Public projection of a user"""

    id: str
    email: str
    name: Optional[str] = None


class RegisterResponse(BaseModel):
    """HTTP payload wrapping the registered user"""

    message: str
    user: PublicUser
