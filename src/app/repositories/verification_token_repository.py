from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import TokenSubject, VerificationToken


class IVerificationTokenRepository(ABC):
    """VerificationToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: VerificationToken) -> VerificationToken:
        """Persist a new token row"""
        pass

    @abstractmethod
    async def get(self, subject: TokenSubject, token_hash: str) -> Optional[VerificationToken]:
        """Look up a token row without consuming it"""
        pass

    @abstractmethod
    async def consume(self, subject: TokenSubject, token_hash: str) -> Optional[VerificationToken]:
        """
        Atomically remove a token row and return it.

        Returns None when the row does not exist or when a concurrent caller
        removed it first. Exactly one of several racing callers gets the row.
        """
        pass
