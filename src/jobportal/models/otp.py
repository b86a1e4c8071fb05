"""SQLAlchemy model for issued one-time passcodes."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from jobportal.models.base import Base


class OtpCode(Base):
    """One issued code for one contact (phone number or email address).

    Rows are never evicted on expiry; ``expires_at`` is compared at read
    time. Issuing a new code for a contact replaces that contact's row.
    """

    __tablename__ = "otp_codes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contact_kind: Mapped[str] = mapped_column(
        String(10), nullable=False, doc="'phone' or 'email'"
    )
    contact: Mapped[str] = mapped_column(String(256), nullable=False)
    code: Mapped[str] = mapped_column(String(12), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )

    __table_args__ = (Index("ix_otp_codes_contact", "contact_kind", "contact"),)

    def __repr__(self) -> str:
        return f"<OtpCode id={self.id} {self.contact_kind}={self.contact!r}>"
