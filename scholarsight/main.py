"""ScholarSight server.

One uvicorn process serves the review API (``/review``, ``/health``, ``/docs``)
and the NiceGUI dashboard at ``/``. The dashboard talks to Gemini in process;
it does not call the HTTP API.

Environment:
    HOST, PORT: Bind address (default 0.0.0.0:8000).
    LOG_LEVEL: Root log level (default INFO).
    NICEGUI_STORAGE_SECRET: Secret for NiceGUI's per-browser storage.
"""

import logging
import os
import sys

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from nicegui import ui

from scholarsight.api.app import create_app

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def build_app() -> FastAPI:
    """Create the API app with the review dashboard mounted on it."""
    from scholarsight.ui import review_page  # noqa: F401 - registers the "/" page

    app = create_app()
    ui.run_with(
        app,
        title="ScholarSight",
        favicon="📄",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "scholarsight-secret"),
    )
    return app


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))

    app = build_app()
    logger.info(f"ScholarSight listening on http://{host}:{port} (API docs at /docs)")
    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
