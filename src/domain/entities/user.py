"""
User Entity

Durable identity record at the root of the account lifecycle.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - a person who can sign in to the application.

    Business Rules:
    - Email is stored normalized (trimmed, lower-case) and unique across users
    - password_hash is a bcrypt hash; None for federated-only accounts
    - email_verified is the verification timestamp, None while unverified
    - Unverified users cannot sign in with a password
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)  # Bcrypt output
    name: Optional[str] = Field(default=None, max_length=255)

    # Email verification
    email_verified: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    role: UserRole = Field(default=UserRole.USER)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_role", "role"),)

    @property
    def is_verified(self) -> bool:
        return self.email_verified is not None
