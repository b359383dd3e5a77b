"""
FastAPI application setup and configuration.
Main entry point for the confeti API service.

Architecture:
- All statistics routes live under /api/v1
- Application.start() runs in the lifespan hook unless already started
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from confeti.__version__ import __version__
from confeti.interfaces.api.v1 import report_stats_if, speaker_stats_if

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
#  App lifecycle
# ----------------------------------------------------------------------
@asynccontextmanager
async def lifespan(_app_instance: FastAPI):
    """
    FastAPI lifespan context manager.

    Starts the Application container (idempotent) and stops it on shutdown.
    """
    # Import application only when lifespan runs (not at module import time)
    from confeti.app import application

    if not application.is_running():
        application.start()
    logger.info("[API] FastAPI starting")

    try:
        yield
    finally:
        logger.info("[API] FastAPI shutting down...")
        application.stop()
        logger.info("[API] Shutdown complete")


# ----------------------------------------------------------------------
#  FastAPI app
# ----------------------------------------------------------------------
api_app = FastAPI(title="confeti", version=__version__, lifespan=lifespan)


# Global exception handler
@api_app.exception_handler(Exception)
async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"[API] Exception: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


api_router = APIRouter(prefix="/api")
api_router.include_router(report_stats_if.router)
api_router.include_router(speaker_stats_if.router)
api_app.include_router(api_router)
