"""Highlight job REST API: submit a video URL, poll progress."""

import logging
import uuid
from typing import Any

from fastapi import APIRouter, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from models.job import Clip, Job
from services.runner import job_runner
from services.store import job_store

router = APIRouter(tags=["jobs"])
logger = logging.getLogger(__name__)

INVALID_URL_ERROR = "Invalid or missing YouTube URL"
_ALLOWED_SCHEMES = ("http://", "https://")
PROCESS_VIDEO_PATH = "/process-video"


class ProcessVideoRequest(BaseModel):
    # Any value is accepted here so a wrong type gets the same 400 as a bad URL.
    youtube_url: Any = Field(default=None, alias="youtubeUrl")


class ProcessVideoResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    job_id: str = Field(alias="jobId")


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class ClipResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    duration: str
    preview_url: str = Field(alias="previewUrl")
    download_url: str = Field(alias="downloadUrl")

    @classmethod
    def from_clip(cls, clip: Clip) -> "ClipResponse":
        return cls(
            id=clip.id,
            title=clip.title,
            duration=clip.duration,
            preview_url=clip.url,
            download_url=clip.url,
        )


class ProgressResponse(BaseModel):
    """Job progress for polling. GET /progress/{job_id}."""

    progress: int
    step: str
    clips: list[ClipResponse] | None = None

    @classmethod
    def from_job(cls, job: Job) -> "ProgressResponse":
        clips = [ClipResponse.from_clip(c) for c in job.clips] if job.clips is not None else None
        return cls(progress=job.progress, step=job.step, clips=clips)


def is_valid_video_url(url: Any) -> bool:
    return isinstance(url, str) and url.lower().startswith(_ALLOWED_SCHEMES)


def _invalid_url_response() -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=INVALID_URL_ERROR).model_dump(),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or non-object bodies on POST /process-video get the structured 400; other routes keep 422."""
    if request.url.path == PROCESS_VIDEO_PATH:
        logger.info("[jobs] POST %s rejected malformed body: %s", PROCESS_VIDEO_PATH, exc.errors())
        return _invalid_url_response()
    return await request_validation_exception_handler(request, exc)


@router.post(
    PROCESS_VIDEO_PATH,
    response_model=ProcessVideoResponse,
    responses={400: {"model": ErrorResponse}},
)
async def process_video(payload: ProcessVideoRequest | None = None) -> ProcessVideoResponse | JSONResponse:
    """Create a job and start it in the background. Responds before any download starts."""
    url = payload.youtube_url if payload is not None else None
    if not is_valid_video_url(url):
        logger.info("[jobs] POST /process-video rejected url=%r", url)
        return _invalid_url_response()

    job_id = str(uuid.uuid4())
    job_store.create(job_id)
    job_runner.spawn(job_id, url)
    logger.info("[jobs] POST /process-video → 200 job_id=%s url=%s", job_id, url)
    return ProcessVideoResponse(job_id=job_id)


@router.get("/progress/{job_id}", response_model=ProgressResponse)
def get_progress(job_id: str) -> ProgressResponse:
    """Current progress snapshot. Unknown or expired IDs return the default snapshot, never 404."""
    return ProgressResponse.from_job(job_store.read(job_id))
