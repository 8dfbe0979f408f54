"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from fastapi import Request

from docsearch.core.engine import DocumentEngine
from docsearch.errors import UPSTREAM_UNAVAILABLE, ApiError, ErrorKind


def get_engine(request: Request) -> DocumentEngine:
    """Get the engine attached to the running application.

    The engine is placed on ``app.state`` by the application lifespan once
    the search engine connection has been established.

    Raises:
        ApiError: If the engine is not initialized.
    """
    engine: DocumentEngine | None = getattr(request.app.state, "engine", None)
    if engine is None:
        raise ApiError(ErrorKind.UPSTREAM_UNAVAILABLE, UPSTREAM_UNAVAILABLE)
    return engine
