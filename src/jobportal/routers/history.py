"""Login history endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.clock import UtcDatetime
from jobportal.database.engine import get_session
from jobportal.database.repository import LoginHistoryRepository

router = APIRouter(prefix="/api", tags=["audit"])


class LoginHistoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    browser_type: str
    os_type: str
    ip_address: str
    login_time: UtcDatetime


@router.get("/login-history", response_model=list[LoginHistoryOut])
async def login_history(session: AsyncSession = Depends(get_session)):
    """Every recorded request fingerprint, newest first."""
    return await LoginHistoryRepository(session).newest_first()
