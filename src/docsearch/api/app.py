"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docsearch import __version__
from docsearch.api.router import router
from docsearch.config.settings import Settings
from docsearch.core.engine import DocumentEngine
from docsearch.errors import MALFORMED_BODY, ApiError, ErrorKind
from docsearch.models.response import ErrorResponse
from docsearch.observability.logging import setup_logging

logger = logging.getLogger(__name__)


# Resolved settings handed from the CLI to reload / worker processes
SETTINGS_ENV_VAR = "DOCSEARCH_RESOLVED_SETTINGS"


def load_settings() -> Settings:
    """Resolve settings for an app created without explicit settings.

    Order: the CLI's exported snapshot, then ``docsearch-config.yaml`` if
    present, then environment variables and defaults.
    """
    snapshot = os.environ.get(SETTINGS_ENV_VAR)
    if snapshot:
        return Settings.model_validate_json(snapshot)
    yaml_path = Path("docsearch-config.yaml")
    if yaml_path.exists():
        return Settings.from_yaml(yaml_path)
    return Settings()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, resolved by ``load_settings()``.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = load_settings()

    setup_logging(settings.observability)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Wait for the search engine, then serve; close the client on shutdown."""
        logger.info("Starting docsearch v%s", __version__)

        engine = DocumentEngine(settings)
        # Blocks until Elasticsearch answers (or the retry policy gives up)
        await engine.initialize()

        app.state.settings = settings
        app.state.engine = engine

        logger.info("docsearch is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down docsearch...")
        await engine.shutdown()
        app.state.engine = None
        logger.info("docsearch shutdown complete")

    app = FastAPI(
        title="docsearch",
        description="Bulk-index book records into Elasticsearch and search them with fuzzy multi-field matching.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)
    app.include_router(router)

    return app


def _error_response(kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=kind.status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def _register_error_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"error": "<message>"}``."""

    @app.exception_handler(ApiError)
    async def _api_error(_request: Request, exc: ApiError) -> JSONResponse:
        return _error_response(exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return _error_response(ErrorKind.BAD_REQUEST, MALFORMED_BODY)
