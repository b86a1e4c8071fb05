"""Tests for OTP generation, issuance and verification."""

from __future__ import annotations

from collections import Counter
from datetime import timedelta

import pytest

from jobportal.errors import DeliveryError, UsageError
from jobportal.services.otp_service import OtpService, OtpStatus, generate_code
from jobportal.services.otp_store import ContactKind, OtpStore

MOBILE = "+15551234567"
EMAIL = "alice@example.com"


@pytest.fixture
def store(session_factory):
    return OtpStore(session_factory)


@pytest.fixture
def service(store, sms_sender, email_sender, clock):
    return OtpService(
        store=store,
        sms=sms_sender,
        email=email_sender,
        clock=clock,
        code_factory=lambda: "123456",
    )


# ── Generation ───────────────────────────────────────────

def test_generated_code_is_six_digits():
    for _ in range(500):
        code = generate_code()
        assert len(code) == 6
        assert code.isdigit()
        assert set(code) <= set("0123456789")


def test_generated_digits_are_uniform():
    counts = Counter("".join(generate_code() for _ in range(10_000)))
    assert set(counts) == set("0123456789")
    # 60 000 digits → 6 000 expected per digit; the bounds sit past 5 sigma.
    for digit, count in counts.items():
        assert 5_600 < count < 6_400, (digit, count)


def test_generate_code_custom_length():
    assert len(generate_code(8)) == 8


# ── Issuance ─────────────────────────────────────────────

@pytest.mark.asyncio
async def test_request_otp_sms_only(service, store, sms_sender, email_sender, clock):
    result = await service.request_otp(mobile=MOBILE)

    assert result.code == "123456"
    assert result.channels == ("sms",)
    assert result.expires_at == clock.now() + timedelta(minutes=5)
    sms_sender.send_sms.assert_awaited_once_with(MOBILE, "Your OTP is 123456")
    email_sender.send_email.assert_not_called()
    assert await store.find(ContactKind.PHONE, MOBILE, "123456") is not None


@pytest.mark.asyncio
async def test_request_otp_both_channels(service, store, sms_sender, email_sender):
    result = await service.request_otp(mobile=MOBILE, email=EMAIL)

    assert result.channels == ("sms", "email")
    email_sender.send_email.assert_awaited_once_with(
        EMAIL, "Your OTP Code", "Your OTP code is 123456"
    )
    assert await store.find(ContactKind.PHONE, MOBILE, "123456") is not None
    assert await store.find(ContactKind.EMAIL, EMAIL, "123456") is not None


@pytest.mark.asyncio
async def test_request_otp_requires_a_destination(service, sms_sender):
    with pytest.raises(UsageError):
        await service.request_otp()
    with pytest.raises(UsageError):
        await service.request_otp(mobile="", email="")
    sms_sender.send_sms.assert_not_called()


@pytest.mark.asyncio
async def test_sms_failure_persists_nothing(service, store, sms_sender, email_sender):
    sms_sender.send_sms.side_effect = DeliveryError("sms", "Twilio down")

    with pytest.raises(DeliveryError) as excinfo:
        await service.request_otp(mobile=MOBILE, email=EMAIL)

    assert excinfo.value.channel == "sms"
    email_sender.send_email.assert_not_called()
    assert await store.find(ContactKind.PHONE, MOBILE, "123456") is None
    assert await store.find(ContactKind.EMAIL, EMAIL, "123456") is None


@pytest.mark.asyncio
async def test_email_failure_after_sms_persists_nothing(service, store, email_sender):
    email_sender.send_email.side_effect = DeliveryError("email", "SMTP down")

    with pytest.raises(DeliveryError) as excinfo:
        await service.request_otp(mobile=MOBILE, email=EMAIL)

    assert excinfo.value.channel == "email"
    assert await store.find(ContactKind.PHONE, MOBILE, "123456") is None


# ── Verification ─────────────────────────────────────────

@pytest.mark.asyncio
async def test_verify_is_non_consuming_until_expiry(service, clock):
    await service.request_otp(mobile=MOBILE)

    assert await service.verify_otp(MOBILE, "123456") is OtpStatus.VALID
    clock.advance(seconds=1)
    assert await service.verify_otp(MOBILE, "123456") is OtpStatus.VALID
    clock.advance(minutes=6)
    assert await service.verify_otp(MOBILE, "123456") is OtpStatus.EXPIRED


@pytest.mark.asyncio
async def test_verify_email_namespace(service):
    await service.request_otp(email=EMAIL)
    assert await service.verify_otp(EMAIL, "123456") is OtpStatus.VALID
    assert await service.verify_otp(MOBILE, "123456") is OtpStatus.INVALID


@pytest.mark.asyncio
async def test_wrong_code_and_unknown_contact_look_the_same(service):
    await service.request_otp(mobile=MOBILE)
    assert await service.verify_otp(MOBILE, "000000") is OtpStatus.INVALID
    assert await service.verify_otp("+19999999999", "123456") is OtpStatus.INVALID


@pytest.mark.asyncio
async def test_reissue_replaces_code(store, sms_sender, email_sender, clock):
    codes = iter(["111111", "222222"])
    service = OtpService(store, sms_sender, email_sender, clock, code_factory=lambda: next(codes))

    await service.request_otp(mobile=MOBILE)
    await service.request_otp(mobile=MOBILE)

    assert await service.verify_otp(MOBILE, "111111") is OtpStatus.INVALID
    assert await service.verify_otp(MOBILE, "222222") is OtpStatus.VALID
