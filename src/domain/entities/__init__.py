"""
Account Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import TokenPurpose, UserRole

# Export all entities
from .user import User
from .verification_token import TokenSubject, VerificationToken
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "TokenPurpose",
    "UserRole",
    # Entities
    "User",
    "TokenSubject",
    "VerificationToken",
    "AuditEvent",
]
