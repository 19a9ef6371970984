from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from routes.jobs import router as jobs_router
from routes.jobs import validation_error_handler
from services.config import get_clips_dir

CLIPS_MOUNT_PATH = "/clips"

app = FastAPI(title="Highlight Clipper API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(jobs_router)
app.add_exception_handler(RequestValidationError, validation_error_handler)

# StaticFiles refuses to serve from a missing directory, so create it before mounting.
_clips_dir = get_clips_dir()
_clips_dir.mkdir(parents=True, exist_ok=True)
app.mount(CLIPS_MOUNT_PATH, StaticFiles(directory=_clips_dir), name="clips")


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Backend is running ✅"


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
