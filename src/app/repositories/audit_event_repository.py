from abc import ABC, abstractmethod

from src.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """
    Append-only store for the audit trail.

    Rows are written by the database audit sink after a use case has
    committed: AUTH_SUCCESS/AUTH_FAILURE on login, USER_REGISTERED,
    EMAIL_VERIFIED, PASSWORD_RESET_REQUESTED and PASSWORD_RESET_COMPLETED.
    Nothing updates or deletes them.
    """

    @abstractmethod
    async def append(self, audit_event: AuditEvent) -> None:
        """Stage one audit row in the current transaction"""
        pass
