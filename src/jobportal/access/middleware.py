"""Access middleware chain: TimeGate check, then audit, then the route."""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from jobportal.access.audit import AuditEntry, AuditWriter
from jobportal.access.time_gate import TimeGate
from jobportal.access.user_agent import classify_browser

logger = logging.getLogger(__name__)


class AccessControlMiddleware(BaseHTTPMiddleware):
    """Gates every request, records admitted ones, then hands off to the route.

    A denied request gets a plain-text 403 and is neither audited nor routed.
    """

    def __init__(self, app: ASGIApp, gate: TimeGate, audit: AuditWriter) -> None:
        super().__init__(app)
        self._gate = gate
        self._audit = audit

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        user_agent = request.headers.get("user-agent")

        decision = self._gate.evaluate(user_agent)
        if not decision.allowed:
            return PlainTextResponse(self._gate.denial_message, status_code=403)

        self._audit.submit(
            AuditEntry(
                browser_type=classify_browser(user_agent).value,
                os_type=decision.os_family.value,
                ip_address=request.client.host if request.client else "unknown",
                login_time=self._gate.clock.now(),
            )
        )
        return await call_next(request)
