"""
FastAPI application setup and configuration.
Main entry point for the Bundlr API service.

Architecture:
- Web UI APIs live under /api/web
- No bare paths that don't start with /api
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from bundlr.__version__ import __version__
from bundlr.interfaces.api import web


# ----------------------------------------------------------------------
#  App lifecycle
# ----------------------------------------------------------------------
@asynccontextmanager
async def lifespan(_app_instance: FastAPI):
    """
    FastAPI lifespan context manager.

    Note: Application.start() is called by start.py BEFORE uvicorn runs.
    This lifespan only handles cleanup on API shutdown.
    """
    # Import application only when lifespan runs (not at module import time)
    from bundlr.app import application

    logging.info("[API] FastAPI starting (Application already initialized)")

    try:
        yield
    finally:
        logging.info("[API] FastAPI shutting down...")
        application.stop()
        logging.info("[API] Shutdown complete")


# ----------------------------------------------------------------------
#  FastAPI app
# ----------------------------------------------------------------------
api_app = FastAPI(title="Bundlr", version=__version__, lifespan=lifespan)


# Global exception handler
@api_app.exception_handler(Exception)
async def exception_handler(request, exc: Exception):
    logging.exception(f"[API] Exception: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


api_app.include_router(web.router)
