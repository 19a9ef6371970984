"""Highlight job pipeline: download, cut three fixed segments, publish clips."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable, Sequence
from contextlib import suppress
from pathlib import Path

from models.job import (
    COMPLETE_PROGRESS,
    CUT_PROGRESS_SPAN,
    DOWNLOAD_DONE_PROGRESS,
    FAILED_PROGRESS,
    HIGHLIGHT_SEGMENTS,
    STEP_CUTTING,
    STEP_DOWNLOADING,
    STEP_FAILED,
    STEP_FINALIZING,
    Clip,
    Segment,
)
from services import cutter, fetcher
from services.config import get_clips_dir, get_public_base_url, get_work_dir
from services.expiry import ExpiryScheduler
from services.store import JobStore, job_store

logger = logging.getLogger(__name__)

FetchFn = Callable[..., Awaitable[Path]]
CutFn = Callable[[Path, float, float, Path], Awaitable[Path]]


def cut_progress(completed: int, total: int) -> int:
    """Progress after `completed` of `total` cuts: 50, 70, 90 for three clips."""
    return DOWNLOAD_DONE_PROGRESS + (completed * CUT_PROGRESS_SPAN) // total


class JobRunner:
    """
    Runs one job's pipeline end to end and records progress in a JobStore.

    `process` never raises: any failure becomes progress -1 / "Processing failed".
    `spawn` launches `process` as a detached task so the HTTP response that
    created the job does not wait for it.
    """

    def __init__(
        self,
        store: JobStore,
        *,
        expiry: ExpiryScheduler | None = None,
        fetch: FetchFn = fetcher.fetch,
        cut: CutFn = cutter.cut,
        segments: Sequence[Segment] = HIGHLIGHT_SEGMENTS,
        clips_dir: Path | None = None,
        work_dir: Path | None = None,
        base_url: str | None = None,
    ) -> None:
        self._store = store
        self._expiry = expiry or ExpiryScheduler(store)
        self._fetch = fetch
        self._cut = cut
        self._segments = tuple(segments)
        self._clips_dir = clips_dir
        self._work_dir = work_dir
        self._base_url = base_url
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def clips_dir(self) -> Path:
        return self._clips_dir if self._clips_dir is not None else get_clips_dir()

    @property
    def work_dir(self) -> Path:
        return self._work_dir if self._work_dir is not None else get_work_dir()

    @property
    def base_url(self) -> str:
        return (self._base_url if self._base_url is not None else get_public_base_url()).rstrip("/")

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def spawn(self, job_id: str, url: str) -> asyncio.Task[None]:
        """Start the pipeline in the background. Nothing is reported back to the caller."""
        task = asyncio.create_task(self.process(job_id, url), name=f"job-{job_id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait until every spawned job has reached a terminal state."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def process(self, job_id: str, url: str) -> None:
        logger.info("[runner] Processing job_id=%s url=%s", job_id, url)
        try:
            await self._run(job_id, url)
        except Exception as exc:  # noqa: BLE001
            logger.error("[runner] Job %s failed: %s", job_id, exc, exc_info=True)
            self._store.update(job_id, progress=FAILED_PROGRESS, step=STEP_FAILED)
        finally:
            self._expiry.schedule(job_id)

    async def _run(self, job_id: str, url: str) -> None:
        clips_dir = self.clips_dir
        clips_dir.mkdir(parents=True, exist_ok=True)
        source_path = self.work_dir / f"{job_id}.mp4"

        self._store.update(job_id, step=STEP_DOWNLOADING)
        await self._fetch(
            url,
            source_path,
            format=fetcher.MERGED_MP4_FORMAT,
            merge_output_format=fetcher.MERGE_OUTPUT_FORMAT,
        )
        self._store.update(job_id, progress=DOWNLOAD_DONE_PROGRESS)
        logger.info("[runner] Job %s downloaded source to %s", job_id, source_path)

        self._store.update(job_id, step=STEP_CUTTING)
        clips: list[Clip] = []
        total = len(self._segments)
        for index, segment in enumerate(self._segments, start=1):
            clip_id = uuid.uuid4().hex
            filename = f"clip-{clip_id}.mp4"
            # A failed cut aborts the job; clips already written stay on disk.
            await self._cut(source_path, segment.start, segment.duration, clips_dir / filename)
            clips.append(
                Clip(
                    id=clip_id,
                    title=f"Highlight {index}",
                    duration=segment.duration_label,
                    filename=filename,
                    url=f"{self.base_url}/clips/{filename}",
                )
            )
            self._store.update(job_id, progress=cut_progress(index, total))
            logger.info("[runner] Job %s clip %d/%d ready: %s", job_id, index, total, filename)

        self._store.update(job_id, progress=COMPLETE_PROGRESS, step=STEP_FINALIZING, clips=clips)
        with suppress(OSError):
            source_path.unlink(missing_ok=True)
        logger.info("[runner] Job completed: job_id=%s clips=%d", job_id, len(clips))


# Singleton runner used by the HTTP routes.
job_runner = JobRunner(job_store)
