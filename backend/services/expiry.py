from __future__ import annotations

import asyncio
import logging

from services.config import get_job_retention_seconds
from services.store import JobStore

logger = logging.getLogger(__name__)


class ExpiryScheduler:
    """
    One-shot deferred removal of finished jobs from a JobStore.

    Each job gets at most one pending expiry, armed with loop.call_later when
    the job reaches a terminal state. There is no cancel: once scheduled, the
    record is dropped after `delay` seconds.
    """

    def __init__(self, store: JobStore, *, delay: float | None = None) -> None:
        self._store = store
        self._delay = delay
        self._handles: dict[str, asyncio.TimerHandle] = {}

    @property
    def delay(self) -> float:
        return self._delay if self._delay is not None else get_job_retention_seconds()

    @property
    def pending(self) -> frozenset[str]:
        return frozenset(self._handles)

    def schedule(self, job_id: str) -> bool:
        """Arm the expiry for job_id. Returns False if one is already pending."""
        if job_id in self._handles:
            return False
        loop = asyncio.get_running_loop()
        delay = self.delay
        self._handles[job_id] = loop.call_later(delay, self._expire, job_id)
        logger.info("[expiry] Job %s scheduled for removal in %.0fs", job_id, delay)
        return True

    def _expire(self, job_id: str) -> None:
        self._handles.pop(job_id, None)
        self._store.expire(job_id)
