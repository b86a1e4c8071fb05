"""SQLAlchemy models for job/internship listings and applications."""

import enum
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jobportal.models.base import Base, new_id


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


def _now() -> datetime:
    return datetime.now(UTC)


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str | None] = mapped_column(String(256))
    company: Mapped[str | None] = mapped_column(String(256))
    location: Mapped[str | None] = mapped_column(String(256))
    experience: Mapped[str | None] = mapped_column(String(128))
    category: Mapped[str | None] = mapped_column(String(128))
    about_company: Mapped[str | None] = mapped_column(Text)
    about_job: Mapped[str | None] = mapped_column(Text)
    who_can_apply: Mapped[str | None] = mapped_column(Text)
    perks: Mapped[list[Any]] = mapped_column(JSON, default=list)
    additional_info: Mapped[str | None] = mapped_column(Text)
    ctc: Mapped[str | None] = mapped_column(String(128))
    start_date: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)


class Internship(Base):
    __tablename__ = "internships"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str | None] = mapped_column(String(256))
    company: Mapped[str | None] = mapped_column(String(256))
    location: Mapped[str | None] = mapped_column(String(256))
    duration: Mapped[str | None] = mapped_column(String(128))
    category: Mapped[str | None] = mapped_column(String(128))
    about_company: Mapped[str | None] = mapped_column(Text)
    about_internship: Mapped[str | None] = mapped_column(Text)
    who_can_apply: Mapped[str | None] = mapped_column(Text)
    perks: Mapped[list[Any]] = mapped_column(JSON, default=list)
    additional_info: Mapped[str | None] = mapped_column(Text)
    stipend: Mapped[str | None] = mapped_column(String(128))
    start_date: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)


class Application(Base):
    """A candidate's application to a job or internship."""

    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    cover_letter: Mapped[str | None] = mapped_column(Text)
    user: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    company: Mapped[str | None] = mapped_column(String(256))
    category: Mapped[str | None] = mapped_column(String(128))
    body: Mapped[str | None] = mapped_column(Text)
    application_id: Mapped[str | None] = mapped_column(String(64))
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ApplicationStatus.PENDING.value
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
