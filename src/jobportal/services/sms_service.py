"""SMS delivery via the Twilio Messages REST API."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from jobportal.config import Settings
from jobportal.errors import DeliveryError

logger = logging.getLogger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


class SmsSender(Protocol):
    async def send_sms(self, destination: str, message: str) -> None:
        """Send *message* to *destination*; raise ``DeliveryError`` on failure."""


class TwilioSmsSender:
    """Async HTTP wrapper around Twilio's ``Messages.json`` endpoint."""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._from_number = from_number
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> TwilioSmsSender:
        return cls(
            account_sid=settings.twilio_account_sid,
            auth_token=settings.twilio_auth_token,
            from_number=settings.twilio_phone_number,
        )

    @property
    def configured(self) -> bool:
        return bool(self._account_sid and self._auth_token and self._from_number)

    async def send_sms(self, destination: str, message: str) -> None:
        if not self.configured:
            raise DeliveryError("sms", "Twilio is not configured")

        url = f"{TWILIO_API_BASE}/Accounts/{self._account_sid}/Messages.json"
        payload = {"To": destination, "From": self._from_number, "Body": message}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.post(
                    url, data=payload, auth=(self._account_sid, self._auth_token)
                )
        except httpx.HTTPError as exc:
            logger.exception("Twilio request error to=%s: %s", destination, exc)
            raise DeliveryError("sms", "Failed to reach Twilio API") from exc

        if resp.is_error:
            logger.error(
                "Twilio API error to=%s: %s %s", destination, resp.status_code, resp.text
            )
            raise DeliveryError("sms", "Failed to send SMS")

        logger.info("SMS sent to %s", destination)
