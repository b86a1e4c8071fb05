"""TimeGate — decides whether a request may proceed, by device class and hour."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo

from jobportal.access.user_agent import OsFamily, classify_os
from jobportal.clock import Clock
from jobportal.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of one TimeGate evaluation. Never persisted."""

    allowed: bool
    os_family: OsFamily
    local_hour: int


class TimeGate:
    """Admits mobile clients (iOS, Android) only within ``[start_hour, end_hour)``.

    Every other device class is always admitted. The hour is read from the
    injected clock and converted to ``timezone`` (server local time when
    ``None``).
    """

    def __init__(
        self,
        clock: Clock,
        start_hour: int = 10,
        end_hour: int = 13,
        timezone: tzinfo | None = None,
    ) -> None:
        if not 0 <= start_hour < end_hour <= 24:
            raise ValueError(f"Invalid access window [{start_hour}, {end_hour})")
        self._clock = clock
        self._start_hour = start_hour
        self._end_hour = end_hour
        self._timezone = timezone

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock) -> TimeGate:
        tz = ZoneInfo(settings.access_timezone) if settings.access_timezone else None
        return cls(
            clock,
            start_hour=settings.access_window_start_hour,
            end_hour=settings.access_window_end_hour,
            timezone=tz,
        )

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def denial_message(self) -> str:
        return (
            f"Access denied outside {_format_hour(self._start_hour)} "
            f"to {_format_hour(self._end_hour)}"
        )

    def evaluate(self, user_agent: str | None) -> AccessDecision:
        os_family = classify_os(user_agent)
        local_hour = self._clock.now().astimezone(self._timezone).hour
        allowed = (
            not os_family.is_mobile
            or self._start_hour <= local_hour < self._end_hour
        )
        if not allowed:
            logger.info("Denied %s client at local hour %d", os_family.value, local_hour)
        return AccessDecision(allowed=allowed, os_family=os_family, local_hour=local_hour)


def _format_hour(hour: int) -> str:
    suffix = "AM" if hour % 24 < 12 else "PM"
    return f"{hour % 12 or 12} {suffix}"
