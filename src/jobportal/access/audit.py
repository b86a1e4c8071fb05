"""Request audit log — background writer for client fingerprints."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobportal.database.repository import LoginHistoryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditEntry:
    """Fingerprint of one admitted request."""

    browser_type: str
    os_type: str
    ip_address: str
    login_time: datetime


class AuditWriter:
    """Persists audit entries on a worker task, detached from the request.

    ``submit`` never blocks and never raises; append failures are logged by
    the worker and dropped. Call :meth:`start` / :meth:`stop` from the app
    lifespan.
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession], max_queue: int = 1000
    ) -> None:
        self._session_factory = session_factory
        self._queue: asyncio.Queue[AuditEntry] = asyncio.Queue(maxsize=max_queue)
        self._worker: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        if not self.running:
            self._worker = asyncio.create_task(self._run(), name="audit-writer")
            logger.debug("Audit writer started")

    async def stop(self) -> None:
        """Flush pending entries, then cancel the worker."""
        if self._worker is None:
            return
        await self.drain()
        self._worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._worker
        self._worker = None
        logger.debug("Audit writer stopped")

    def submit(self, entry: AuditEntry) -> None:
        try:
            self._queue.put_nowait(entry)
        except asyncio.QueueFull:
            logger.warning("Audit queue full, dropping entry from %s", entry.ip_address)

    async def drain(self) -> None:
        """Wait until every submitted entry has been processed."""
        await self._queue.join()

    async def _run(self) -> None:
        while True:
            entry = await self._queue.get()
            try:
                await self._append(entry)
            except Exception:
                logger.exception("Error recording login information for %s", entry.ip_address)
            finally:
                self._queue.task_done()

    async def _append(self, entry: AuditEntry) -> None:
        async with self._session_factory() as session:
            repo = LoginHistoryRepository(session)
            await repo.append(
                browser_type=entry.browser_type,
                os_type=entry.os_type,
                ip_address=entry.ip_address,
                login_time=entry.login_time,
            )
            await session.commit()
        logger.debug(
            "Login information recorded: %s / %s from %s",
            entry.browser_type,
            entry.os_type,
            entry.ip_address,
        )
