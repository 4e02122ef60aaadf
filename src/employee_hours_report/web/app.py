"""
FastAPI application for Employee Hours Report.

PURPOSE: Application factory and server runner for the web preview.
AI CONTEXT: Creates app with all routes registered.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from ..__version__ import __version__
from .routes import router

__all__ = ["create_app", "run_dashboard"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:  # noqa: ARG001
    """
    Log startup and shutdown of the preview server.

    Args:
        app: The FastAPI application instance (provided by FastAPI).

    Yields:
        None. Control returns to FastAPI to handle requests.
    """
    logger.info("Employee Hours Report preview starting (v%s)", __version__)
    yield
    logger.info("Employee Hours Report preview shutting down")


def create_app(api_url: str | None = None) -> FastAPI:
    """
    Create and configure the FastAPI preview application.

    Business context: The preview lets someone check the current report
    in a browser without producing output files.

    Args:
        api_url: Feed URL for all requests. Default: Config.get_api_url()
            resolved per request.

    Returns:
        Configured FastAPI application with /, /chart.png and
        /api/totals registered.

    Example:
        >>> from fastapi.testclient import TestClient
        >>> client = TestClient(create_app())
        >>> client.get('/').status_code
        200
    """
    app = FastAPI(
        title="Employee Hours Report",
        description="Per-employee totals of tracked time",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.api_url = api_url

    app.include_router(router)

    return app


def run_dashboard(
    host: str = "127.0.0.1",
    port: int = 8000,
    api_url: str | None = None,
    log_level: str = "info",
) -> None:
    """
    Launch the preview server with uvicorn.

    Args:
        host: Network interface to bind the server to.
        port: TCP port number for the HTTP server.
        api_url: Feed URL override passed to create_app().
        log_level: Uvicorn logging verbosity.

    Returns:
        None. Blocks until the server is stopped (Ctrl+C).

    Raises:
        OSError: If the port is already in use or host is invalid.
    """
    uvicorn.run(
        create_app(api_url=api_url),
        host=host,
        port=port,
        log_level=log_level,
    )
