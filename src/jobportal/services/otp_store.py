"""OTP store — persisted codes keyed by contact, with expiry checked at read time."""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobportal.clock import as_utc
from jobportal.errors import StorageError
from jobportal.models.otp import OtpCode

logger = logging.getLogger(__name__)


class ContactKind(str, enum.Enum):
    PHONE = "phone"
    EMAIL = "email"

    @classmethod
    def infer(cls, contact: str) -> ContactKind:
        return cls.EMAIL if "@" in contact else cls.PHONE


class OtpState(str, enum.Enum):
    ISSUED = "issued"
    EXPIRED = "expired"


@dataclass(frozen=True)
class OtpRecord:
    """Read-only view of a stored code."""

    contact_kind: ContactKind
    contact: str
    code: str
    expires_at: datetime

    def status_at(self, now: datetime) -> OtpState:
        if now >= self.expires_at:
            return OtpState.EXPIRED
        return OtpState.ISSUED


class OtpStore:
    """Database-backed OTP store.

    Each contact holds at most one row: saving a new code for a contact
    deletes the previous one in the same transaction. Expired rows are
    left in place. Concurrent saves for one contact are not serialised.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(
        self, kind: ContactKind, contact: str, code: str, expires_at: datetime
    ) -> OtpRecord:
        """Store *code* for *contact*, replacing any earlier code."""
        (record,) = await self.save_many([(kind, contact)], code, expires_at)
        return record

    async def save_many(
        self,
        contacts: Sequence[tuple[ContactKind, str]],
        code: str,
        expires_at: datetime,
    ) -> list[OtpRecord]:
        """Store one *code* for several contacts in a single transaction.

        Either every contact gets the new code or none does.
        """
        try:
            async with self._session_factory() as session:
                for kind, contact in contacts:
                    await session.execute(
                        delete(OtpCode).where(
                            OtpCode.contact_kind == kind.value, OtpCode.contact == contact
                        )
                    )
                    session.add(
                        OtpCode(
                            contact_kind=kind.value,
                            contact=contact,
                            code=code,
                            expires_at=expires_at,
                        )
                    )
                await session.commit()
        except SQLAlchemyError as exc:
            logger.exception(
                "Failed to store OTP for %s", ", ".join(contact for _, contact in contacts)
            )
            raise StorageError("Failed to store OTP") from exc

        records = [OtpRecord(kind, contact, code, expires_at) for kind, contact in contacts]
        for record in records:
            logger.info(
                "OTP stored for %s %s (expires %s)",
                record.contact_kind.value,
                record.contact,
                expires_at,
            )
        return records

    async def find(self, kind: ContactKind, contact: str, code: str) -> OtpRecord | None:
        """Return the stored record matching contact and code exactly, if any."""
        stmt = (
            select(OtpCode)
            .where(
                OtpCode.contact_kind == kind.value,
                OtpCode.contact == contact,
                OtpCode.code == code,
            )
            .order_by(OtpCode.id.desc())
            .limit(1)
        )
        try:
            async with self._session_factory() as session:
                row = (await session.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("Failed to look up OTP for %s %s", kind.value, contact)
            raise StorageError("Failed to look up OTP") from exc

        if row is None:
            return None
        return OtpRecord(kind, row.contact, row.code, as_utc(row.expires_at))
