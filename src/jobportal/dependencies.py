"""FastAPI dependencies resolving the components built in ``create_app``."""

from fastapi import Request

from jobportal.config import Settings
from jobportal.services.email_service import EmailSender
from jobportal.services.otp_service import OtpService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_otp_service(request: Request) -> OtpService:
    return request.app.state.otp_service


def get_email_sender(request: Request) -> EmailSender:
    return request.app.state.email_sender
