"""
Hersteller Service — Mail Service Interface
=============================================

What:  Outbound notification collaborator used after a manufacturer is created.
How:   Abstract MailService with two implementations:
         - SmtpMailService:    sends an HTML mail through SMTP
         - LoggingMailService: writes the message to the log only
       create_mail_service() picks one from Settings.mail_activated.
Who:   Called by HerstellerWriteService from a background task.

Failures are the caller's to log. A failed notification never undoes or
fails the write that triggered it, and nothing retries it.
"""

import asyncio
import logging
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage

from hersteller_api.config import Settings

logger = logging.getLogger(__name__)


class MailService(ABC):
    """
    Contract:
        - send() delivers one message with an HTML body
        - Raises on delivery failure; never retries by itself
    """

    @abstractmethod
    async def send(self, subject: str, body: str) -> None:
        ...


class SmtpMailService(MailService):
    """
    Sends mail with the standard library's smtplib.

    smtplib is blocking, so each send runs in a worker thread to keep the
    event loop free.
    """

    def __init__(self, host: str, port: int, sender: str, recipient: str, timeout: float = 5.0):
        self.host = host
        self.port = port
        self.sender = sender
        self.recipient = recipient
        self.timeout = timeout
        logger.info("SmtpMailService initialized: %s:%d → %s", host, port, recipient)

    def _build_message(self, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = self.recipient
        message.set_content(body, subtype="html")
        return message

    def _send_blocking(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.send_message(message)

    async def send(self, subject: str, body: str) -> None:
        message = self._build_message(subject, body)
        await asyncio.to_thread(self._send_blocking, message)
        logger.info("Mail sent: subject=%r", subject)


class LoggingMailService(MailService):
    """Stand-in used when mail is deactivated; the message only reaches the log."""

    async def send(self, subject: str, body: str) -> None:
        logger.info("Mail (not sent, mail deactivated): subject=%r body=%r", subject, body)


def create_mail_service(settings: Settings) -> MailService:
    """Select the implementation for the configured environment."""
    if settings.mail_activated:
        return SmtpMailService(
            host=settings.mail_host,
            port=settings.mail_port,
            sender=settings.mail_from,
            recipient=settings.mail_to,
            timeout=settings.mail_timeout,
        )
    return LoggingMailService()
