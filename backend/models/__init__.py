from .job import (
    COMPLETE_PROGRESS,
    CUT_PROGRESS_SPAN,
    DOWNLOAD_DONE_PROGRESS,
    FAILED_PROGRESS,
    HIGHLIGHT_SEGMENTS,
    STEP_CUTTING,
    STEP_DOWNLOADING,
    STEP_FAILED,
    STEP_FINALIZING,
    STEP_PREPARING,
    STEP_STARTING,
    Clip,
    Job,
    Segment,
)

__all__ = [
    "Job",
    "Clip",
    "Segment",
    "HIGHLIGHT_SEGMENTS",
    "STEP_STARTING",
    "STEP_PREPARING",
    "STEP_DOWNLOADING",
    "STEP_CUTTING",
    "STEP_FINALIZING",
    "STEP_FAILED",
    "DOWNLOAD_DONE_PROGRESS",
    "CUT_PROGRESS_SPAN",
    "COMPLETE_PROGRESS",
    "FAILED_PROGRESS",
]
