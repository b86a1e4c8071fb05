"""Admin login — compares against the configured credentials."""

from __future__ import annotations

import logging
import secrets

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from jobportal.config import Settings
from jobportal.dependencies import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


class AdminLoginRequest(BaseModel):
    username: str
    password: str


def _matches(given: str, expected: str) -> bool:
    return bool(expected) and secrets.compare_digest(given.encode(), expected.encode())


@router.post("/adminLogin", response_class=PlainTextResponse)
async def admin_login(body: AdminLoginRequest, settings: Settings = Depends(get_settings)):
    user_ok = _matches(body.username, settings.admin_username)
    password_ok = _matches(body.password, settings.admin_password)
    if user_ok and password_ok:
        logger.info("Admin %s logged in", body.username)
        return PlainTextResponse("Admin is here")
    logger.warning("Rejected admin login for %r", body.username)
    return PlainTextResponse("Unauthorized", status_code=401)
