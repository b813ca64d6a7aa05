"""
VerificationToken Entity

Single-use secrets for email verification and password reset.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import TokenPurpose


class TokenSubject(BaseModel):
    """
    What a token is filed under: a purpose plus the account email.

    Both token kinds share one table; the purpose column keeps them apart,
    so a verification token can never be replayed as a reset token.
    """

    model_config = ConfigDict(frozen=True)

    purpose: TokenPurpose
    email: str

    @classmethod
    def verification(cls, email: str) -> "TokenSubject":
        return cls(purpose=TokenPurpose.email_verification, email=email)

    @classmethod
    def password_reset(cls, email: str) -> "TokenSubject":
        return cls(purpose=TokenPurpose.password_reset, email=email)


class VerificationToken(SQLModel, table=True):
    """
    VerificationToken entity - a single-use, time-boxed secret.

    Business Rules:
    - Secret is 32 random bytes (64 hex chars); only its SHA-256 is stored
    - Verification tokens expire after 24 hours, reset tokens after 1 hour
    - Deleted on use and on detected expiry; no "used" flag is kept
    - Several valid tokens may exist for the same subject
    """

    __tablename__ = "verification_tokens"

    purpose: TokenPurpose = Field(primary_key=True)
    identifier: str = Field(primary_key=True, max_length=255)  # normalized email
    token_hash: str = Field(primary_key=True, max_length=64)  # SHA-256 output

    expires: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_verification_token_expires", "expires"),)

    @property
    def subject(self) -> TokenSubject:
        return TokenSubject(purpose=self.purpose, email=self.identifier)

    def is_expired(self, now: datetime) -> bool:
        return self.expires < now
