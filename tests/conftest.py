"""Shared test fixtures and configuration."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docsearch.adapters.base.adapter import AdapterHealth, RawResults, SearchAdapter
from docsearch.api.app import create_app
from docsearch.config.settings import Settings
from docsearch.core.engine import DocumentEngine


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults and no retry delay."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        bootstrap={"retry_interval": 0},
        observability={"log_format": "console"},
    )


@pytest.fixture
def fake_adapter() -> MagicMock:
    """A ``SearchAdapter`` double whose async methods are ``AsyncMock``s."""
    adapter = MagicMock(spec=SearchAdapter)
    adapter.name = "fake"
    adapter.initialize = AsyncMock()
    adapter.shutdown = AsyncMock()
    adapter.bulk_index = AsyncMock(side_effect=lambda docs: len(docs))
    adapter.search = AsyncMock(return_value=RawResults())
    adapter.health_check = AsyncMock(return_value=AdapterHealth(status="healthy", message="Cluster: test"))
    return adapter


@pytest.fixture
def engine(settings: Settings, fake_adapter: MagicMock) -> DocumentEngine:
    return DocumentEngine(settings, adapter=fake_adapter)


@pytest.fixture
def app(settings: Settings, engine: DocumentEngine) -> FastAPI:
    """Application with the engine attached directly (lifespan is not run)."""
    application = create_app(settings)
    application.state.engine = engine
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def dune_payload() -> dict[str, Any]:
    return {
        "isbn": "978-0441172719",
        "title": "Dune",
        "subtitle": "",
        "author": "Frank Herbert",
        "published": "1965-08-01T00:00:00Z",
        "publisher": "Chilton Books",
        "pages": 412,
        "description": "Set on the desert planet Arrakis, Dune is the story of Paul Atreides.",
        "website": "https://dunenovels.com",
    }


@pytest.fixture
def dune_hit(dune_payload: dict[str, Any]) -> dict[str, Any]:
    """A raw Elasticsearch hit for the Dune record, with an engine-side extra field."""
    return {
        "_index": "books",
        "_id": "3f2a9c",
        "_score": 4.2,
        "_source": {
            **dune_payload,
            "id": "3f2a9c",
            "created_at": datetime(2024, 5, 1, 12, 0, tzinfo=UTC).isoformat(),
            "ingest_pipeline": "ignored",
        },
    }
