"""Highlight trimming with the ffmpeg binary."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from services.config import get_ffmpeg_binary
from services.errors import CutError

logger = logging.getLogger(__name__)

STDERR_TAIL_CHARS = 500


def build_cut_command(
    input_path: Path,
    start: float,
    duration: float,
    output_path: Path,
    *,
    ffmpeg: str | None = None,
) -> list[str]:
    # -ss before -i seeks the input; faststart moves the moov atom up front for web playback.
    return [
        ffmpeg or get_ffmpeg_binary(),
        "-y",
        "-ss", str(start),
        "-i", str(input_path),
        "-t", str(duration),
        "-movflags", "+faststart",
        str(output_path),
    ]


async def cut(input_path: Path, start: float, duration: float, output_path: Path) -> Path:
    """
    Write `duration` seconds of `input_path` starting at `start` to `output_path`.

    Raises CutError if ffmpeg is missing, exits non-zero, or writes nothing.
    """
    cmd = build_cut_command(input_path, start, duration, output_path)
    logger.info("[cutter] Cutting %s start=%s duration=%s -> %s", input_path, start, duration, output_path)
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise CutError(f"ffmpeg not found: {cmd[0]}") from exc
    _, stderr = await proc.communicate()
    if proc.returncode != 0:
        tail = stderr.decode("utf-8", errors="replace")[-STDERR_TAIL_CHARS:]
        raise CutError(f"ffmpeg exited with {proc.returncode}: {tail}")
    if not output_path.exists():
        raise CutError(f"ffmpeg produced no file at {output_path}")
    return output_path
