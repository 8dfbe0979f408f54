"""API router — Document and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from docsearch.api.endpoints.documents import router as documents_router
from docsearch.api.endpoints.health import router as health_router

router = APIRouter()
router.include_router(documents_router, tags=["documents"])
router.include_router(health_router, tags=["health"])
