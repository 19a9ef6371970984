from __future__ import annotations

import logging
import os

import uvicorn
from dotenv import load_dotenv

# Load .env from backend dir (where server.py runs) before settings are read.
load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))

from services.config import get_host, get_log_level, get_port  # noqa: E402

logging.basicConfig(level=get_log_level())
logger = logging.getLogger(__name__)


def main() -> None:
    from app.main import app  # noqa: PLC0415

    host, port = get_host(), get_port()
    for route in app.routes:
        if hasattr(route, "path") and hasattr(route, "methods"):
            logger.info("App route: %s %s", sorted(route.methods) if route.methods else "GET", route.path)
    logger.info("Backend running on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level=get_log_level().lower())


if __name__ == "__main__":
    main()
