from abc import ABC, abstractmethod
from typing import Optional


class IMailer(ABC):
    """Outbound email transport"""

    @abstractmethod
    async def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        """Deliver one message; raises on transport failure"""
        pass
