"""Repositories — data access layer for listings and the login history."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.models.base import Base
from jobportal.models.listing import Application, ApplicationStatus, Internship, Job
from jobportal.models.login_history import LoginHistory

ModelT = TypeVar("ModelT", bound=Base)


class ListingRepository(Generic[ModelT]):
    """Plain create / list / get-by-id queries for one listing table."""

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, data: dict[str, Any]) -> ModelT:
        row = self.model(**data)
        self._session.add(row)
        await self._session.flush()
        await self._session.refresh(row)
        return row

    async def list_all(self) -> Sequence[ModelT]:
        result = await self._session.execute(select(self.model))
        return result.scalars().all()

    async def get(self, row_id: str) -> ModelT | None:
        return await self._session.get(self.model, row_id)


class JobRepository(ListingRepository[Job]):
    model = Job


class InternshipRepository(ListingRepository[Internship]):
    model = Internship


class ApplicationRepository(ListingRepository[Application]):
    model = Application

    async def update_status(
        self, row_id: str, status: ApplicationStatus
    ) -> Application | None:
        """Set the status of an application; ``None`` if it does not exist."""
        application = await self.get(row_id)
        if application is None:
            return None
        application.status = status.value
        await self._session.flush()
        return application


class LoginHistoryRepository:
    """Append-only access to the request audit log."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(
        self, browser_type: str, os_type: str, ip_address: str, login_time: datetime
    ) -> LoginHistory:
        row = LoginHistory(
            browser_type=browser_type,
            os_type=os_type,
            ip_address=ip_address,
            login_time=login_time,
        )
        self._session.add(row)
        await self._session.flush()
        return row

    async def newest_first(self) -> Sequence[LoginHistory]:
        """Every recorded entry, most recent ``login_time`` first."""
        stmt = select(LoginHistory).order_by(
            LoginHistory.login_time.desc(), LoginHistory.id.desc()
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()
