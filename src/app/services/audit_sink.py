from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from uuid import UUID


class IAuditSink(ABC):
    """Destination for audit events"""

    @abstractmethod
    async def record(
        self, action: str, fields: Dict[str, Any], user_id: Optional[UUID] = None
    ) -> None:
        """Store one audit event; raises on transport failure"""
        pass
