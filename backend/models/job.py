from dataclasses import dataclass, field
from datetime import datetime, timezone

STEP_STARTING = "Starting…"
STEP_PREPARING = "Preparing…"
STEP_DOWNLOADING = "Downloading video…"
STEP_CUTTING = "Cutting highlight clips…"
STEP_FINALIZING = "Finalizing clips…"
STEP_FAILED = "Processing failed"

DOWNLOAD_DONE_PROGRESS = 30
CUT_PROGRESS_SPAN = 60                 # cuts move progress from 30 to 90
COMPLETE_PROGRESS = 100
FAILED_PROGRESS = -1

TERMINAL_PROGRESS = (COMPLETE_PROGRESS, FAILED_PROGRESS)


@dataclass(frozen=True)
class Segment:
    start: int                         # seconds from the start of the source
    duration: int                      # seconds

    @property
    def duration_label(self) -> str:
        minutes, seconds = divmod(self.duration, 60)
        return f"{minutes:02d}:{seconds:02d}"


HIGHLIGHT_SEGMENTS: tuple[Segment, ...] = (
    Segment(start=10, duration=20),
    Segment(start=40, duration=20),
    Segment(start=70, duration=20),
)


@dataclass(frozen=True)
class Clip:
    id: str                            # uuid4 hex, independent of the job id
    title: str                         # "Highlight N"
    duration: str                      # "MM:SS" label
    filename: str                      # clip-<id>.mp4 under the clips dir
    url: str                           # public URL served from /clips


@dataclass
class Job:
    id: str
    progress: int = 0
    step: str = STEP_STARTING
    clips: list[Clip] | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.progress in TERMINAL_PROGRESS
