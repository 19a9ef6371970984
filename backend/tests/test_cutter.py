"""Tests for the ffmpeg cutter: command construction and exit-status mapping."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from services.cutter import build_cut_command, cut
from services.errors import CutError


def _fake_process(returncode: int, stderr: bytes = b"") -> MagicMock:
    proc = MagicMock()
    proc.returncode = returncode
    proc.communicate = AsyncMock(return_value=(b"", stderr))
    return proc


def test_build_cut_command_seeks_input_and_sets_faststart() -> None:
    cmd = build_cut_command(Path("in.mp4"), 10, 20, Path("out.mp4"), ffmpeg="/opt/ffmpeg")
    assert cmd == [
        "/opt/ffmpeg",
        "-y",
        "-ss", "10",
        "-i", "in.mp4",
        "-t", "20",
        "-movflags", "+faststart",
        "out.mp4",
    ]


def test_build_cut_command_uses_configured_binary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FFMPEG_BINARY", "/usr/local/bin/ffmpeg")
    assert build_cut_command(Path("a"), 0, 1, Path("b"))[0] == "/usr/local/bin/ffmpeg"


@pytest.mark.anyio
async def test_cut_returns_output_path_on_success(tmp_path: Path) -> None:
    output = tmp_path / "clip.mp4"
    output.write_bytes(b"clip")
    with patch(
        "services.cutter.asyncio.create_subprocess_exec",
        AsyncMock(return_value=_fake_process(0)),
    ) as exec_mock:
        result = await cut(tmp_path / "src.mp4", 40, 20, output)

    assert result == output
    args = exec_mock.call_args[0]
    assert args[args.index("-ss") + 1] == "40"
    assert args[args.index("-t") + 1] == "20"
    assert args[-1] == str(output)


@pytest.mark.anyio
async def test_cut_raises_on_nonzero_exit(tmp_path: Path) -> None:
    with patch(
        "services.cutter.asyncio.create_subprocess_exec",
        AsyncMock(return_value=_fake_process(1, b"Invalid data found when processing input")),
    ):
        with pytest.raises(CutError, match="Invalid data found"):
            await cut(tmp_path / "src.mp4", 10, 20, tmp_path / "clip.mp4")


@pytest.mark.anyio
async def test_cut_raises_when_binary_missing(tmp_path: Path) -> None:
    with patch(
        "services.cutter.asyncio.create_subprocess_exec",
        AsyncMock(side_effect=FileNotFoundError("ffmpeg")),
    ):
        with pytest.raises(CutError, match="not found"):
            await cut(tmp_path / "src.mp4", 10, 20, tmp_path / "clip.mp4")


@pytest.mark.anyio
async def test_cut_raises_when_no_output_written(tmp_path: Path) -> None:
    with patch(
        "services.cutter.asyncio.create_subprocess_exec",
        AsyncMock(return_value=_fake_process(0)),
    ):
        with pytest.raises(CutError, match="no file"):
            await cut(tmp_path / "src.mp4", 10, 20, tmp_path / "clip.mp4")
