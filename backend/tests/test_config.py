import tempfile
from pathlib import Path

import pytest

from services import config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PORT", "HOST", "PUBLIC_BASE_URL", "CLIPS_DIR", "WORK_DIR",
        "JOB_RETENTION_SECONDS", "FFMPEG_BINARY", "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    assert config.get_port() == 4000
    assert config.get_host() == "0.0.0.0"
    assert config.get_public_base_url() == "http://localhost:4000"
    assert config.get_clips_dir() == Path("public/clips")
    assert config.get_work_dir() == Path(tempfile.gettempdir())
    assert config.get_job_retention_seconds() == 300
    assert config.get_ffmpeg_binary() == "ffmpeg"
    assert config.get_log_level() == "INFO"


def test_base_url_follows_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    assert config.get_public_base_url() == "http://localhost:8080"


def test_base_url_override_strips_trailing_slash(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUBLIC_BASE_URL", "  https://cdn.example.com/  ")
    assert config.get_public_base_url() == "https://cdn.example.com"


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLIPS_DIR", "/srv/clips")
    monkeypatch.setenv("WORK_DIR", "/srv/work")
    monkeypatch.setenv("JOB_RETENTION_SECONDS", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert config.get_clips_dir() == Path("/srv/clips")
    assert config.get_work_dir() == Path("/srv/work")
    assert config.get_job_retention_seconds() == 2.5
    assert config.get_log_level() == "DEBUG"


@pytest.mark.parametrize("raw", ["abc", "-5"])
def test_invalid_numbers_fall_back_to_default(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("PORT", raw)
    monkeypatch.setenv("JOB_RETENTION_SECONDS", raw)
    assert config.get_port() == 4000
    assert config.get_job_retention_seconds() == 300
