"""Health check endpoint — Service and search engine status."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from docsearch import __version__
from docsearch.adapters.base.adapter import AdapterHealth
from docsearch.api.deps import get_engine
from docsearch.core.engine import DocumentEngine

router = APIRouter()


class HealthResponse(BaseModel):
    """System health check response."""

    status: str = Field(description="Service status (always 'healthy' while serving)")
    version: str = Field(description="docsearch server version")
    service: str = Field(description="Service name ('docsearch')")
    elasticsearch: AdapterHealth = Field(description="Health of the backing search engine")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns service version and the health of the Elasticsearch cluster.",
)
async def health_check(
    engine: DocumentEngine = Depends(get_engine),
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        service="docsearch",
        elasticsearch=await engine.health_check(),
    )
