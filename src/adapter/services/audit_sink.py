"""
Audit sinks

Every audit entry is logged as "[AUDIT] <action>". DatabaseAuditSink also
stores it as an AuditEvent row, in its own session so that an audit write
never shares a transaction with the operation being audited.
"""

import logging
from typing import Any, Callable, Dict, Optional
from uuid import UUID

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.audit_sink import IAuditSink
from src.domain.entities import AuditEvent

logger = logging.getLogger("audit")


class LoggingAuditSink(IAuditSink):
    async def record(
        self, action: str, fields: Dict[str, Any], user_id: Optional[UUID] = None
    ) -> None:
        logger.info("[AUDIT] %s user_id=%s %s", action, user_id, fields)


class DatabaseAuditSink(LoggingAuditSink):
    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def record(
        self, action: str, fields: Dict[str, Any], user_id: Optional[UUID] = None
    ) -> None:
        await super().record(action, fields, user_id=user_id)
        async with self.session_factory() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                await uow.audit_events.append(
                    AuditEvent(user_id=user_id, action=action, event_metadata=fields)
                )
                await uow.commit()
