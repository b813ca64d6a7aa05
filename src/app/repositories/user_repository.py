from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import User


class DuplicateEmailError(Exception):
    """Raised by create() when the store's unique email constraint fires"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User with email {email!r} already exists")


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user, raising DuplicateEmailError on a taken email"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """All users, newest first"""
        pass
