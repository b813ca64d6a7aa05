"""
Post-commit side effects

Use cases never talk to the mailer or the audit sink. They return these
events on Result.events and the caller hands them to the EventDispatcher
once the transaction is over.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    pass


class VerificationEmailRequested(DomainEvent):
    email: str
    token: str
    expires_in: str = "24 hours"


class PasswordResetEmailRequested(DomainEvent):
    email: str
    token: str
    expires_in: str = "1 hour"


class WelcomeEmailRequested(DomainEvent):
    email: str
    name: Optional[str] = None


class AuditRecorded(DomainEvent):
    action: str
    user_id: Optional[UUID] = None
    fields: Dict[str, Any] = Field(default_factory=dict)
