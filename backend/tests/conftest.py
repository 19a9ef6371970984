import os
import tempfile

import pytest

# app.main mounts CLIPS_DIR at import; point it somewhere disposable first.
os.environ.setdefault("CLIPS_DIR", tempfile.mkdtemp(prefix="clips-test-"))
os.environ.setdefault("PUBLIC_BASE_URL", "http://clips.test")


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
