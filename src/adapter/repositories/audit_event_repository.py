from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.domain.entities import AuditEvent


class AuditEventRepository(IAuditEventRepository):
    """Writes audit rows through the unit of work's session; the caller commits"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(self, audit_event: AuditEvent) -> None:
        self.session.add(audit_event)
        await self.session.flush()
