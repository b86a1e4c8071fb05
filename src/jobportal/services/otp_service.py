"""OTP service — issues codes over SMS/email and checks them."""

from __future__ import annotations

import enum
import logging
import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from jobportal.clock import Clock
from jobportal.errors import UsageError
from jobportal.services.email_service import EmailSender
from jobportal.services.otp_store import ContactKind, OtpState, OtpStore
from jobportal.services.sms_service import SmsSender

logger = logging.getLogger(__name__)

OTP_LENGTH = 6
OTP_TTL_SECONDS = 300  # 5 minutes


def generate_code(length: int = OTP_LENGTH) -> str:
    """Return *length* digits, each drawn independently and uniformly."""
    return "".join(secrets.choice(string.digits) for _ in range(length))


class OtpStatus(str, enum.Enum):
    VALID = "valid"
    INVALID = "invalid"
    EXPIRED = "expired"


@dataclass(frozen=True)
class OtpIssueResult:
    code: str
    expires_at: datetime
    channels: tuple[str, ...]


class OtpService:
    """Generates, delivers, persists and verifies one-time passcodes.

    Delivery happens before persistence: if any attempted channel fails the
    ``DeliveryError`` propagates and no code is stored. Verification is a
    pure read, so a code can be verified repeatedly until it expires.
    """

    def __init__(
        self,
        store: OtpStore,
        sms: SmsSender,
        email: EmailSender,
        clock: Clock,
        ttl_seconds: int = OTP_TTL_SECONDS,
        email_subject: str = "Your OTP Code",
        code_factory: Callable[[], str] = generate_code,
    ) -> None:
        self._store = store
        self._sms = sms
        self._email = email
        self._clock = clock
        self._ttl = timedelta(seconds=ttl_seconds)
        self._email_subject = email_subject
        self._code_factory = code_factory

    async def request_otp(
        self, mobile: str | None = None, email: str | None = None
    ) -> OtpIssueResult:
        """Send a fresh code to every supplied destination, then store it."""
        if not mobile and not email:
            raise UsageError("Either mobile or email is required")

        code = self._code_factory()
        channels: list[str] = []

        if mobile:
            await self._sms.send_sms(mobile, f"Your OTP is {code}")
            channels.append("sms")
            logger.info("OTP sent to mobile number: %s", mobile)
            logger.debug("OTP %s sent to %s", code, mobile)

        if email:
            await self._email.send_email(
                email, self._email_subject, f"Your OTP code is {code}"
            )
            channels.append("email")
            logger.info("OTP sent to email: %s", email)
            logger.debug("OTP %s sent to %s", code, email)

        contacts: list[tuple[ContactKind, str]] = []
        if mobile:
            contacts.append((ContactKind.PHONE, mobile))
        if email:
            contacts.append((ContactKind.EMAIL, email))
        expires_at = self._clock.now() + self._ttl
        await self._store.save_many(contacts, code, expires_at)

        return OtpIssueResult(code=code, expires_at=expires_at, channels=tuple(channels))

    async def verify_otp(
        self, contact: str, code: str, kind: ContactKind | None = None
    ) -> OtpStatus:
        """Check *code* for *contact* without consuming it.

        A wrong code and a never-issued code both yield ``INVALID``.
        """
        kind = kind or ContactKind.infer(contact)
        record = await self._store.find(kind, contact, code)
        if record is None:
            logger.info("OTP verification failed for %s", contact)
            return OtpStatus.INVALID

        if record.status_at(self._clock.now()) is OtpState.EXPIRED:
            logger.info("OTP expired for %s", contact)
            return OtpStatus.EXPIRED

        logger.info("OTP verified for %s", contact)
        return OtpStatus.VALID
