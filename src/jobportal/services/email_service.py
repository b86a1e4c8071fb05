"""Email service — sends transactional emails via async SMTP."""

from __future__ import annotations

import logging
from email.message import EmailMessage
from typing import Protocol

import aiosmtplib

from jobportal.config import Settings
from jobportal.errors import DeliveryError

logger = logging.getLogger(__name__)


class EmailSender(Protocol):
    async def send_email(self, destination: str, subject: str, message: str) -> None:
        """Send a plain-text email; raise ``DeliveryError`` on failure."""


class EmailService:
    """Sends plain-text emails using the configured SMTP server."""

    def __init__(
        self,
        hostname: str,
        port: int,
        sender: str,
        username: str = "",
        password: str = "",
    ) -> None:
        self._hostname = hostname
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password

    @classmethod
    def from_settings(cls, settings: Settings) -> EmailService:
        return cls(
            hostname=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.email_from,
            username=settings.smtp_username,
            password=settings.smtp_password,
        )

    async def send_email(self, destination: str, subject: str, message: str) -> None:
        """Send *message* to *destination*.

        Parameters
        ----------
        destination:
            Recipient email address.
        subject:
            Subject line.
        message:
            Plain-text body.
        """
        if not self._hostname or not self._sender:
            raise DeliveryError("email", "SMTP is not configured")

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self._sender
        msg["To"] = destination
        msg.set_content(message)

        logger.info("Sending email to %s", destination)
        try:
            await aiosmtplib.send(
                msg,
                hostname=self._hostname,
                port=self._port,
                username=self._username or None,
                password=self._password or None,
                start_tls=True,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error("SMTP error sending to %s: %s", destination, exc)
            raise DeliveryError("email", "Failed to send email") from exc

        logger.info("Email sent to %s", destination)
