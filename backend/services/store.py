"""In-memory job store keyed by job ID. Not persisted across restarts."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone

from models.job import STEP_PREPARING, Clip, Job
from services.errors import JobExistsError

logger = logging.getLogger(__name__)


class JobStore:
    """
    Process-wide map of job ID -> Job.

    Progress polling runs in FastAPI's threadpool while runners write from the
    event loop, so every access goes through one lock. Each job has exactly one
    writer (its runner); the lock only keeps the map itself consistent.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._jobs: dict[str, Job] = {}

    def create(self, job_id: str) -> Job:
        with self._lock:
            if job_id in self._jobs:
                raise JobExistsError(job_id)
            job = Job(id=job_id)
            self._jobs[job_id] = job
        logger.info("[store] Job created: job_id=%s", job_id)
        return replace(job)

    def update(
        self,
        job_id: str,
        *,
        progress: int | None = None,
        step: str | None = None,
        clips: list[Clip] | None = None,
    ) -> None:
        """Partial update. Unknown IDs (e.g. already expired) are ignored."""
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return
            if progress is not None:
                job.progress = progress
                if job.is_terminal and job.finished_at is None:
                    job.finished_at = datetime.now(timezone.utc)
            if step is not None:
                job.step = step
            if clips is not None:
                job.clips = list(clips)

    def read(self, job_id: str) -> Job:
        """
        Snapshot of the job, or the "unknown job" default.

        The default (progress 0, "Preparing…", no clips) looks the same as a job
        that was just created; callers cannot tell the two apart.
        """
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return Job(id=job_id, step=STEP_PREPARING)
            return replace(job, clips=list(job.clips) if job.clips is not None else None)

    def expire(self, job_id: str) -> None:
        with self._lock:
            removed = self._jobs.pop(job_id, None)
        if removed is not None:
            logger.info(
                "[store] Job expired: job_id=%s progress=%s finished_at=%s",
                job_id,
                removed.progress,
                removed.finished_at.isoformat() if removed.finished_at else None,
            )

    def clear(self) -> None:
        with self._lock:
            self._jobs.clear()

    def __contains__(self, job_id: object) -> bool:
        with self._lock:
            return job_id in self._jobs

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)


# Singleton store shared by the routes and the job runner.
job_store = JobStore()
