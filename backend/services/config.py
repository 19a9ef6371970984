"""Environment-driven settings for the clip service. Values are read on each call so tests can patch os.environ."""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PORT = 4000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_CLIPS_DIR = "public/clips"
DEFAULT_JOB_RETENTION_SECONDS = 5 * 60
DEFAULT_FFMPEG_BINARY = "ffmpeg"
DEFAULT_LOG_LEVEL = "INFO"


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


def _env_number(name: str, default: float, cast: type = int):
    raw = _env(name)
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("[config] %s=%r is not a valid number; using %s", name, raw, default)
        return default
    if value < 0:
        logger.warning("[config] %s=%r must not be negative; using %s", name, raw, default)
        return default
    return value


def get_port() -> int:
    """Listen port from PORT env or 4000."""
    return _env_number("PORT", DEFAULT_PORT)


def get_host() -> str:
    return _env("HOST") or DEFAULT_HOST


def get_public_base_url() -> str:
    """
    Base URL used to build clip links, without a trailing slash.

    Falls back to http://localhost:<PORT> when PUBLIC_BASE_URL is unset.
    """
    base = _env("PUBLIC_BASE_URL") or f"http://localhost:{get_port()}"
    return base.rstrip("/")


def get_clips_dir() -> Path:
    """Directory clips are written to and served from (CLIPS_DIR or public/clips)."""
    return Path(_env("CLIPS_DIR") or DEFAULT_CLIPS_DIR)


def get_work_dir() -> Path:
    """Directory for intermediate source downloads (WORK_DIR or the system temp dir)."""
    return Path(_env("WORK_DIR") or tempfile.gettempdir())


def get_job_retention_seconds() -> float:
    """Seconds a finished job stays pollable before it is dropped from the store."""
    return _env_number("JOB_RETENTION_SECONDS", DEFAULT_JOB_RETENTION_SECONDS, float)


def get_ffmpeg_binary() -> str:
    return _env("FFMPEG_BINARY") or DEFAULT_FFMPEG_BINARY


def get_log_level() -> str:
    return (_env("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
