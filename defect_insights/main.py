"""
defect_insights/main.py

FastAPI application factory.

Run locally with::

    uvicorn defect_insights.main:app --reload

or ``python -m defect_insights.main``.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from defect_insights import __version__
from defect_insights.config import load_env_files


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    load_env_files()
    _configure_logging()

    application = FastAPI(
        title="Defect Insights API",
        version=__version__,
    )

    from defect_insights.api.routers import analytics_router, defects_router

    application.include_router(defects_router)
    application.include_router(analytics_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    logging.getLogger(__name__).info("Defect Insights API initialised")
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("defect_insights.main:app", host="127.0.0.1", port=8000)
