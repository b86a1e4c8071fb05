"""SQLAlchemy model for the request audit log."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from jobportal.models.base import Base


class LoginHistory(Base):
    """Client fingerprint of one admitted request. Append-only."""

    __tablename__ = "login_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    browser_type: Mapped[str] = mapped_column(String(32), nullable=False)
    os_type: Mapped[str] = mapped_column(String(32), nullable=False)
    ip_address: Mapped[str] = mapped_column(String(64), nullable=False)
    login_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("ix_login_history_login_time", "login_time"),)
