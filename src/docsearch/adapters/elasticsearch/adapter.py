"""Elasticsearch adapter — Bulk indexing and fuzzy multi-field search (v8+).

Uses the official async client (``elasticsearch[async]``).  Documents are
written with one ``_bulk`` request per batch and searched with a ``multi_match``
query whose fields, fuzziness and ``minimum_should_match`` are configurable.
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any

from elasticsearch import AsyncElasticsearch

from docsearch.adapters.base.adapter import AdapterHealth, RawResults, SearchAdapter
from docsearch.adapters.base.exceptions import (
    ConfigurationError,
    ConnectionError,
    IndexingError,
    QueryError,
)
from docsearch.models.query import SearchQuery

logger = logging.getLogger(__name__)


class ElasticsearchAdapter(SearchAdapter):
    """Search adapter for Elasticsearch.

    Args:
        hosts: List of Elasticsearch node URLs.
        index: Index documents are written to and searched in.
        fields: Fields the ``multi_match`` query runs against.
        fuzziness: Fuzziness for the query, or None to disable fuzzy matching.
        minimum_should_match: ``minimum_should_match`` for the query.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        api_key: Optional API key.
        verify_certs: Whether to verify TLS certificates.
        refresh_on_create: Wait for a refresh after bulk indexing.
        **kwargs: Additional keyword arguments forwarded to ``AsyncElasticsearch``.
    """

    def __init__(
        self,
        hosts: list[str] | None = None,
        index: str = "books",
        fields: list[str] | None = None,
        fuzziness: str | None = "2",
        minimum_should_match: str = "2",
        username: str | None = None,
        password: str | None = None,
        api_key: str | None = None,
        verify_certs: bool = True,
        refresh_on_create: bool = False,
        **kwargs: Any,
    ) -> None:
        if not index:
            raise ConfigurationError("Elasticsearch index name must not be empty.")
        self._hosts = hosts or ["http://localhost:9200"]
        self._index = index
        self._fields = fields or ["title", "description", "author"]
        self._fuzziness = fuzziness
        self._minimum_should_match = minimum_should_match
        self._username = username
        self._password = password
        self._api_key = api_key
        self._verify_certs = verify_certs
        self._refresh_on_create = refresh_on_create
        self._extra_kwargs = kwargs
        self._client: AsyncElasticsearch | None = None

    @property
    def name(self) -> str:
        return "elasticsearch"

    @property
    def index(self) -> str:
        return self._index

    async def initialize(self) -> None:
        """Create the ``AsyncElasticsearch`` client and verify it with ``info()``."""
        client_kwargs: dict[str, Any] = {
            "hosts": self._hosts,
            "verify_certs": self._verify_certs,
        }
        if self._api_key:
            client_kwargs["api_key"] = self._api_key
        elif self._username and self._password:
            client_kwargs["basic_auth"] = (self._username, self._password)

        client_kwargs.update(self._extra_kwargs)

        client = AsyncElasticsearch(**client_kwargs)
        try:
            info = await client.info()
        except Exception as e:
            await client.close()
            raise ConnectionError(f"Failed to connect to Elasticsearch: {e}") from e

        version = info.get("version", {}).get("number", "unknown")
        cluster = info.get("cluster_name", "unknown")
        logger.info("Connected to Elasticsearch cluster: %s (v%s)", cluster, version)
        self._client = client

    async def shutdown(self) -> None:
        """Close the Elasticsearch client."""
        if self._client:
            await self._client.close()
            self._client = None

    # ── Indexing ─────────────────────────────────────────────────────────

    async def bulk_index(self, documents: list[dict[str, Any]]) -> int:
        """Index all documents in a single bulk request, keyed by their ``id``.

        The batch is never split; any item-level error fails the whole call.
        """
        if not self._client:
            raise ConnectionError("Elasticsearch client not initialized.")
        if not documents:
            return 0

        operations: list[dict[str, Any]] = []
        for doc in documents:
            operations.append({"index": {"_index": self._index, "_id": doc["id"]}})
            operations.append(doc)

        bulk_kwargs: dict[str, Any] = {}
        if self._refresh_on_create:
            bulk_kwargs["refresh"] = "wait_for"

        try:
            response = await self._client.bulk(operations=operations, **bulk_kwargs)
        except Exception as e:
            raise IndexingError(f"Elasticsearch bulk request failed: {e}") from e

        failed = [item for item in response.get("items", []) if any("error" in op for op in item.values())]
        if failed or response.get("errors"):
            raise IndexingError(f"{len(failed)} of {len(documents)} documents failed to index")

        logger.debug("Bulk indexed %d documents into '%s'", len(documents), self._index)
        return len(documents)

    # ── Search ───────────────────────────────────────────────────────────

    def build_query(self, term: str) -> dict[str, Any]:
        """Build the ``multi_match`` clause for a search term."""
        multi_match: dict[str, Any] = {
            "query": term,
            "fields": list(self._fields),
            "minimum_should_match": self._minimum_should_match,
        }
        if self._fuzziness is not None:
            multi_match["fuzziness"] = self._fuzziness
        return {"multi_match": multi_match}

    async def search(self, query: SearchQuery) -> RawResults:
        """Execute a paginated fuzzy multi-field query."""
        if not self._client:
            raise ConnectionError("Elasticsearch client not initialized.")

        try:
            response = await self._client.search(
                index=self._index,
                query=self.build_query(query.term),
                from_=query.skip,
                size=query.take,
            )
        except Exception as e:
            raise QueryError(f"Elasticsearch query failed: {e}") from e

        hits = response.get("hits", {})
        total = hits.get("total", 0)
        # ES 7+ reports {"value": n, "relation": "eq"}; older versions a bare int
        if isinstance(total, dict):
            total = total.get("value", 0)

        return RawResults(
            total_hits=total,
            documents=list(hits.get("hits", [])),
            took_ms=response.get("took", 0),
        )

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> AdapterHealth:
        """Check Elasticsearch cluster health."""
        if not self._client:
            return AdapterHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            health = await self._client.cluster.health()
            latency_ms = int((time.monotonic() - start) * 1000)

            status_map = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}

            return AdapterHealth(
                status=status_map.get(health.get("status", "red"), "unhealthy"),
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
            )
        except Exception as e:
            return AdapterHealth(status="unhealthy", message=str(e))
