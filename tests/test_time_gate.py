"""Tests for user-agent classification and the mobile access window."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from conftest import ANDROID_UA, IPHONE_UA, WINDOWS_UA, FakeClock
from jobportal.access.time_gate import TimeGate
from jobportal.access.user_agent import (
    BrowserFamily,
    OsFamily,
    classify_browser,
    classify_os,
)

MAC_UA = "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/605.1.15 Safari/605.1.15"
IPAD_UA = "Mozilla/5.0 (iPad; CPU OS 17_0 like Mac OS X) AppleWebKit/605.1.15 Mobile/15E148"
EDGE_LEGACY_UA = "Mozilla/5.0 (Windows NT 10.0) AppleWebKit/537.36 Edge/18.19045"


@pytest.mark.parametrize(
    ("user_agent", "expected"),
    [
        (WINDOWS_UA, OsFamily.WINDOWS),
        (MAC_UA, OsFamily.MAC),
        (IPHONE_UA, OsFamily.IOS),
        (IPAD_UA, OsFamily.IOS),
        (ANDROID_UA, OsFamily.ANDROID),
        ("curl/8.4.0", OsFamily.OTHER),
        ("", OsFamily.OTHER),
        (None, OsFamily.OTHER),
        ("mozilla (iphone)", OsFamily.OTHER),  # case-sensitive
    ],
)
def test_classify_os(user_agent, expected):
    assert classify_os(user_agent) is expected


def test_classify_os_first_keyword_wins():
    assert classify_os("Windows Phone; Android 8.0") is OsFamily.WINDOWS


@pytest.mark.parametrize(
    ("user_agent", "expected"),
    [
        (WINDOWS_UA, BrowserFamily.CHROME),
        (EDGE_LEGACY_UA, BrowserFamily.EDGE),
        (WINDOWS_UA + " Edg/120.0", BrowserFamily.CHROME),
        (IPHONE_UA, BrowserFamily.OTHER),
        (None, BrowserFamily.OTHER),
    ],
)
def test_classify_browser(user_agent, expected):
    assert classify_browser(user_agent) is expected


def _gate_at(hour: int, minute: int = 0) -> TimeGate:
    clock = FakeClock(datetime(2026, 1, 15, hour, minute, tzinfo=UTC))
    return TimeGate(clock, start_hour=10, end_hour=13, timezone=UTC)


def test_iphone_denied_before_window():
    decision = _gate_at(9).evaluate(IPHONE_UA)
    assert decision.allowed is False
    assert decision.os_family is OsFamily.IOS
    assert decision.local_hour == 9


def test_iphone_admitted_inside_window():
    assert _gate_at(11).evaluate(IPHONE_UA).allowed is True


def test_windows_admitted_outside_window():
    assert _gate_at(9).evaluate(WINDOWS_UA).allowed is True
    assert _gate_at(23).evaluate(WINDOWS_UA).allowed is True


@pytest.mark.parametrize(
    ("hour", "minute", "allowed"),
    [(9, 59, False), (10, 0, True), (12, 59, True), (13, 0, False)],
)
def test_android_window_is_start_inclusive_end_exclusive(hour, minute, allowed):
    assert _gate_at(hour, minute).evaluate(ANDROID_UA).allowed is allowed


def test_missing_user_agent_is_admitted():
    assert _gate_at(3).evaluate(None).allowed is True


def test_local_hour_uses_configured_timezone():
    # 05:30 UTC is 11:00 at UTC+05:30.
    clock = FakeClock(datetime(2026, 1, 15, 5, 30, tzinfo=UTC))
    gate = TimeGate(clock, timezone=timezone(timedelta(hours=5, minutes=30)))
    decision = gate.evaluate(IPHONE_UA)
    assert decision.local_hour == 11
    assert decision.allowed is True


def test_denial_message():
    assert _gate_at(9).denial_message == "Access denied outside 10 AM to 1 PM"


def test_invalid_window_rejected():
    with pytest.raises(ValueError):
        TimeGate(FakeClock(datetime.now(UTC)), start_hour=13, end_hour=10)
