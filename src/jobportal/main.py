"""FastAPI application entry point."""

import functools
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from jobportal.access.audit import AuditWriter
from jobportal.access.middleware import AccessControlMiddleware
from jobportal.access.time_gate import TimeGate
from jobportal.clock import Clock, SystemClock
from jobportal.config import Settings
from jobportal.database.engine import build_engine, build_session_factory, init_db
from jobportal.errors import register_exception_handlers
from jobportal.routers import admin, history, listings, otp
from jobportal.services.email_service import EmailSender, EmailService
from jobportal.services.otp_service import OtpService, generate_code
from jobportal.services.otp_store import OtpStore
from jobportal.services.sms_service import SmsSender, TwilioSmsSender

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def create_app(
    settings: Settings | None = None,
    *,
    clock: Clock | None = None,
    engine: AsyncEngine | None = None,
    sms_sender: SmsSender | None = None,
    email_sender: EmailSender | None = None,
) -> FastAPI:
    """Build the application and wire every component from one ``Settings``.

    The keyword arguments replace the default collaborators (tests pass a
    fixed clock, a temporary database and stub delivery channels).
    """
    settings = settings or Settings()
    clock = clock or SystemClock()
    engine = engine or build_engine(settings.database_url, echo=settings.debug)
    session_factory = build_session_factory(engine)
    sms_sender = sms_sender or TwilioSmsSender.from_settings(settings)
    email_sender = email_sender or EmailService.from_settings(settings)

    otp_service = OtpService(
        store=OtpStore(session_factory),
        sms=sms_sender,
        email=email_sender,
        clock=clock,
        ttl_seconds=settings.otp_ttl_seconds,
        email_subject=settings.otp_email_subject,
        code_factory=functools.partial(generate_code, settings.otp_length),
    )
    audit_writer = AuditWriter(session_factory, max_queue=settings.audit_queue_size)
    gate = TimeGate.from_settings(settings, clock)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup / shutdown lifecycle hook."""
        logger.info("Starting %s …", settings.app_name)
        await init_db(engine)
        logger.info("Database initialised")
        audit_writer.start()
        yield
        logger.info("Shutting down %s …", settings.app_name)
        await audit_writer.stop()
        await engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Job and internship portal with OTP contact verification",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.clock = clock
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.email_sender = email_sender
    app.state.otp_service = otp_service
    app.state.audit_writer = audit_writer

    # Added first so it runs inside CORS; every route is gated.
    app.add_middleware(AccessControlMiddleware, gate=gate, audit=audit_writer)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(otp.router)
    app.include_router(otp.check_router)
    app.include_router(history.router)
    app.include_router(listings.router)
    app.include_router(admin.router)

    @app.get("/health")
    async def health_check():
        """Simple liveness probe."""
        return {"status": "healthy", "app": settings.app_name}

    return app


def build_default_app() -> FastAPI:
    settings = Settings()
    configure_logging(settings)
    return create_app(settings)


app = build_default_app()
