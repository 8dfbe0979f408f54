"""Base search adapter — Abstract interface for the backing search engine.

The adapter is responsible for:
  1. Establishing (and verifying) the connection to the engine
  2. Bulk-indexing stored documents
  3. Executing search queries and returning raw hits
  4. Reporting health status
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from docsearch.models.query import SearchQuery


class AdapterHealth(BaseModel):
    """Health status of a search adapter."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class RawResults(BaseModel):
    """Raw search results from a backend before reshaping."""

    total_hits: int = Field(default=0, description="Total number of matching documents")
    documents: list[dict[str, Any]] = Field(default_factory=list, description="Raw hit dicts")
    took_ms: int = Field(default=0, description="Engine-reported query execution time in ms")


class SearchAdapter(ABC):
    """Abstract base class for search engine adapters.

    An adapter instance holds a single client handle that is created once
    at startup and then shared, read-only, by all concurrent requests.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name (e.g., 'elasticsearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Create the client handle and verify the engine is reachable.

        Raises:
            ConnectionError: If the engine cannot be reached.
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the client handle and release resources."""

    @abstractmethod
    async def bulk_index(self, documents: list[dict[str, Any]]) -> int:
        """Index a batch of documents in a single bulk operation.

        Each document must carry its ``id``, which is used as the engine-side
        document id.

        Returns:
            Number of documents the engine acknowledged.

        Raises:
            IndexingError: If any part of the bulk request fails.
        """

    @abstractmethod
    async def search(self, query: SearchQuery) -> RawResults:
        """Execute a search query against the backend.

        Raises:
            QueryError: If the engine rejects or fails the query.
        """

    @abstractmethod
    async def health_check(self) -> AdapterHealth:
        """Check the health of the search backend."""
