"""OTP endpoints — send a code, verify it, and the mobile-only check route.

Endpoints
---------
POST /api/send-otp     → deliver a fresh code over SMS and/or email
POST /api/verify-otp   → verify a code for a phone number or email address
POST /check-otp        → verify a code for a phone number (expired → invalid)
POST /api/test-email   → send a test message through the email channel
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, BeforeValidator

from jobportal.dependencies import get_email_sender, get_otp_service
from jobportal.errors import DeliveryError, StorageError
from jobportal.services.email_service import EmailSender
from jobportal.services.otp_service import OtpService, OtpStatus
from jobportal.services.otp_store import ContactKind

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["otp"])
check_router = APIRouter(tags=["otp"])

_CHANNEL_LABELS = {"sms": "SMS", "email": "Email"}


# ── Request / response models ────────────────────────────

def _code_to_str(value: object) -> object:
    # Some clients send the code as a JSON number; leading zeros are already gone.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


OtpCodeField = Annotated[str, BeforeValidator(_code_to_str)]


class SendOtpRequest(BaseModel):
    mobile: str | None = None
    email: str | None = None


class MessageResponse(BaseModel):
    message: str


class VerifyOtpRequest(BaseModel):
    contact: str | None = None
    otp: OtpCodeField | None = None


class VerifyOtpResponse(BaseModel):
    success: bool
    message: str


class CheckOtpRequest(BaseModel):
    mobile: str
    otp: OtpCodeField


class TestEmailRequest(BaseModel):
    email: str


# ── Endpoints ────────────────────────────────────────────

@router.post("/send-otp", response_model=MessageResponse)
async def send_otp(body: SendOtpRequest, service: OtpService = Depends(get_otp_service)):
    """Generate a code and deliver it to every supplied destination.

    Nothing is stored unless every attempted channel succeeded.
    """
    try:
        await service.request_otp(mobile=body.mobile, email=body.email)
    except DeliveryError as exc:
        label = _CHANNEL_LABELS.get(exc.channel, exc.channel)
        logger.error("Error sending OTP via %s: %s", label, exc)
        return JSONResponse(
            status_code=500, content={"error": f"Error sending OTP via {label}"}
        )
    return MessageResponse(message="OTP sent successfully")


@router.post("/verify-otp", response_model=VerifyOtpResponse)
async def verify_otp(body: VerifyOtpRequest, service: OtpService = Depends(get_otp_service)):
    """Verify a code for a phone number or an email address (``@`` → email)."""
    if not body.contact or not body.otp:
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Contact and OTP are required"},
        )
    try:
        status = await service.verify_otp(body.contact, body.otp)
    except StorageError:
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Internal server error"},
        )

    if status is OtpStatus.VALID:
        return VerifyOtpResponse(success=True, message="OTP verified")
    message = "OTP expired" if status is OtpStatus.EXPIRED else "Invalid OTP"
    return JSONResponse(status_code=400, content={"success": False, "message": message})


@check_router.post("/check-otp", response_model=MessageResponse)
async def check_otp(body: CheckOtpRequest, service: OtpService = Depends(get_otp_service)):
    """Mobile-only verification; an expired code is reported as invalid."""
    status = await service.verify_otp(body.mobile, body.otp, kind=ContactKind.PHONE)
    if status is OtpStatus.VALID:
        return MessageResponse(message="OTP is valid")
    return JSONResponse(status_code=400, content={"error": "Invalid OTP"})


@router.post("/test-email", response_model=MessageResponse)
async def send_test_email(
    body: TestEmailRequest, sender: EmailSender = Depends(get_email_sender)
):
    """Send a fixed test message to check the email channel configuration."""
    try:
        await sender.send_email(
            body.email, "Test Email", "This is a test email from the Job Portal."
        )
    except DeliveryError as exc:
        logger.error("Error sending test email: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Error sending test email"})
    return MessageResponse(message="Test email sent successfully")
