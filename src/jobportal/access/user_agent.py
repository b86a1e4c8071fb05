"""User-agent classification by case-sensitive substring match.

The first keyword found wins; a missing or unrecognised user agent is
classified as ``Other``.
"""

from __future__ import annotations

import enum


class OsFamily(str, enum.Enum):
    WINDOWS = "Windows"
    MAC = "Mac"
    IOS = "iOS"
    ANDROID = "Android"
    OTHER = "Other"

    @property
    def is_mobile(self) -> bool:
        return self in (OsFamily.IOS, OsFamily.ANDROID)


class BrowserFamily(str, enum.Enum):
    CHROME = "Google Chrome"
    EDGE = "Microsoft Edge"
    OTHER = "Other"


_OS_KEYWORDS: tuple[tuple[str, OsFamily], ...] = (
    ("Windows", OsFamily.WINDOWS),
    ("Macintosh", OsFamily.MAC),
    ("iPhone", OsFamily.IOS),
    ("iPad", OsFamily.IOS),
    ("Android", OsFamily.ANDROID),
)

# Chromium-based Edge also advertises "Chrome", so it lands in CHROME.
_BROWSER_KEYWORDS: tuple[tuple[str, BrowserFamily], ...] = (
    ("Chrome", BrowserFamily.CHROME),
    ("Edge", BrowserFamily.EDGE),
)


def classify_os(user_agent: str | None) -> OsFamily:
    if user_agent:
        for keyword, family in _OS_KEYWORDS:
            if keyword in user_agent:
                return family
    return OsFamily.OTHER


def classify_browser(user_agent: str | None) -> BrowserFamily:
    if user_agent:
        for keyword, family in _BROWSER_KEYWORDS:
            if keyword in user_agent:
                return family
    return BrowserFamily.OTHER
