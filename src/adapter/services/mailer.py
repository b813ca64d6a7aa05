"""
Mailer implementations

SmtpMailer talks to any SMTP server (Mailpit on localhost:1025 in
development). smtplib is blocking, so delivery runs in a worker thread.
ConsoleMailer only logs, for local runs without a mail server.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from src.app.services.mailer import IMailer

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when an email could not be delivered"""


class SmtpMailer(IMailer):
    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = False,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def build_message(self, to: str, subject: str, html: str, text: Optional[str]) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = to
        message.set_content(text or "")
        message.add_alternative(html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        try:
            # Implicit TLS on 465, optional STARTTLS elsewhere
            smtp_cls = smtplib.SMTP_SSL if self.port == 465 else smtplib.SMTP
            with smtp_cls(host=self.host, port=self.port, timeout=self.timeout) as smtp:
                if self.use_tls and self.port != 465:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryError(f"Failed to send email to {message['To']}") from exc

    async def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        message = self.build_message(to, subject, html, text)
        await asyncio.to_thread(self._deliver, message)
        logger.info("Sent email %r to %s", subject, to)


class ConsoleMailer(IMailer):
    async def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        logger.info("Email to %s: %s\n%s", to, subject, text or html)
