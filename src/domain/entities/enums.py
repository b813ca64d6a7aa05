"""
Account Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Application-wide role, ordered USER < ADMIN"""

    USER = "USER"
    ADMIN = "ADMIN"


class TokenPurpose(str, Enum):
    """What a single-use token unlocks"""

    email_verification = "email_verification"
    password_reset = "password_reset"
