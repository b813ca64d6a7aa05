"""
User Management Use Cases

All user-related business logic.
"""

from .list_users_use_case import ListUsersUseCase, UserSummary

__all__ = [
    "ListUsersUseCase",
    "UserSummary",
]
