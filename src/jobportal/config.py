"""Job Portal — configuration loaded from environment."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide settings, loaded from .env or environment variables.

    Built once by :func:`jobportal.main.create_app` and handed to each
    component's constructor; request handlers never read the environment.
    """

    # ── Database ──────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./jobportal.db"

    # ── OTP ───────────────────────────────────────────────
    otp_length: int = 6
    otp_ttl_seconds: int = 300
    otp_email_subject: str = "Your OTP Code"

    # ── Mobile access window (local hours, end exclusive) ─
    access_window_start_hour: int = 10
    access_window_end_hour: int = 13
    access_timezone: str = ""  # empty → server local time

    # ── Twilio (SMS) ──────────────────────────────────────
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""

    # ── SMTP (email) ──────────────────────────────────────
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    email_from: str = ""

    # ── Admin ─────────────────────────────────────────────
    admin_username: str = ""
    admin_password: str = ""

    # ── App ───────────────────────────────────────────────
    app_name: str = "Job Portal"
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]
    audit_queue_size: int = 1000

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", frozen=True
    )
