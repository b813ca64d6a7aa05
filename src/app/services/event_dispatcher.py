"""
Event Dispatcher

Delivers the events a use case returned. Every delivery is fire-and-forget:
a failing mailer or audit sink is logged and never reaches the caller, so it
cannot change the outcome of the operation that produced the event.
"""

import logging
from typing import Iterable

from src.app.services import emails
from src.app.services.audit_sink import IAuditSink
from src.app.services.events import (
    AuditRecorded,
    DomainEvent,
    PasswordResetEmailRequested,
    VerificationEmailRequested,
    WelcomeEmailRequested,
)
from src.app.services.mailer import IMailer

logger = logging.getLogger(__name__)

VERIFY_PATH = "/auth/verify"
RESET_PATH = "/auth/reset-password"


class EventDispatcher:
    def __init__(self, mailer: IMailer, audit_sink: IAuditSink, app_url: str):
        self.mailer = mailer
        self.audit_sink = audit_sink
        self.app_url = app_url

    async def dispatch(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            try:
                await self._handle(event)
            except Exception:
                logger.exception("Failed to dispatch %s", type(event).__name__)

    async def _handle(self, event: DomainEvent) -> None:
        if isinstance(event, AuditRecorded):
            await self.audit_sink.record(event.action, event.fields, user_id=event.user_id)
        elif isinstance(event, VerificationEmailRequested):
            url = emails.build_link(self.app_url, VERIFY_PATH, event.token, event.email)
            await self._send(event.email, emails.verification_email(url, event.expires_in))
        elif isinstance(event, PasswordResetEmailRequested):
            url = emails.build_link(self.app_url, RESET_PATH, event.token, event.email)
            await self._send(event.email, emails.password_reset_email(url, event.expires_in))
        elif isinstance(event, WelcomeEmailRequested):
            content = emails.welcome_email(event.name or "there", self.app_url)
            await self._send(event.email, content)
        else:
            logger.warning("No handler for event %s", type(event).__name__)

    async def _send(self, to: str, content: emails.EmailContent) -> None:
        await self.mailer.send(to, content.subject, content.html, content.text)
