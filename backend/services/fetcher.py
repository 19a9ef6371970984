"""Source video download through the yt-dlp library."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError

from services.config import DEFAULT_FFMPEG_BINARY, get_ffmpeg_binary
from services.errors import FetchError

logger = logging.getLogger(__name__)

# Prefer separate mp4/m4a streams merged into one file; fall back to a single mp4.
MERGED_MP4_FORMAT = "bestvideo[ext=mp4]+bestaudio[ext=m4a]/mp4"
MERGE_OUTPUT_FORMAT = "mp4"


def build_ydl_options(
    output_path: Path,
    *,
    format: str = MERGED_MP4_FORMAT,
    merge_output_format: str = MERGE_OUTPUT_FORMAT,
) -> dict[str, Any]:
    options: dict[str, Any] = {
        "format": format,
        "merge_output_format": merge_output_format,
        # yt-dlp expands %(...)s fields in outtmpl; a literal % in the path must be doubled.
        "outtmpl": str(output_path).replace("%", "%%"),
        "noplaylist": True,
        "quiet": True,
        "no_warnings": True,
        "noprogress": True,
    }
    ffmpeg = get_ffmpeg_binary()
    if ffmpeg != DEFAULT_FFMPEG_BINARY:
        options["ffmpeg_location"] = ffmpeg
    return options


def _download(url: str, options: dict[str, Any]) -> None:
    with YoutubeDL(options) as ydl:
        ydl.download([url])


async def fetch(
    url: str,
    output_path: Path,
    *,
    format: str = MERGED_MP4_FORMAT,
    merge_output_format: str = MERGE_OUTPUT_FORMAT,
) -> Path:
    """
    Download `url` into a single local media file at `output_path`.

    yt-dlp is blocking, so the download runs in a worker thread. Raises
    FetchError if yt-dlp fails or leaves no file behind.
    """
    options = build_ydl_options(output_path, format=format, merge_output_format=merge_output_format)
    logger.info("[fetcher] Downloading %s -> %s", url, output_path)
    try:
        await asyncio.to_thread(_download, url, options)
    except DownloadError as exc:
        raise FetchError(f"Download failed for {url}: {exc}") from exc
    if not output_path.exists():
        raise FetchError(f"Download for {url} produced no file at {output_path}")
    logger.info("[fetcher] Downloaded %s (%d bytes)", output_path, output_path.stat().st_size)
    return output_path
