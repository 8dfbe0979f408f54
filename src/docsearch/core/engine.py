"""Document engine — Maps API requests onto the search adapter.

The engine owns the single adapter handle for the process lifetime:
  1. Startup: build the adapter from settings and wait for the engine (bootstrap gate)
  2. Create: payloads → stored documents (fresh id + ``created_at``) → one bulk index
  3. Search: term + pagination → adapter query → ``SearchResponse`` envelope
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from docsearch.adapters.base.adapter import AdapterHealth, SearchAdapter
from docsearch.adapters.elasticsearch.adapter import ElasticsearchAdapter
from docsearch.core.bootstrap import RetryPolicy, connect_with_retry
from docsearch.models.document import Document, DocumentRequest, DocumentResponse
from docsearch.models.query import SearchQuery
from docsearch.models.response import SearchResponse

if TYPE_CHECKING:
    from docsearch.config.settings import Settings

logger = logging.getLogger(__name__)


def build_adapter(settings: Settings) -> ElasticsearchAdapter:
    """Create an (uninitialised) Elasticsearch adapter from settings."""
    es = settings.elasticsearch
    return ElasticsearchAdapter(
        hosts=es.hosts,
        index=es.index,
        fields=settings.search.match_fields,
        fuzziness=settings.search.fuzziness,
        minimum_should_match=settings.search.minimum_should_match,
        username=es.username,
        password=es.password,
        api_key=es.api_key,
        verify_certs=es.verify_certs,
        refresh_on_create=es.refresh_on_create,
    )


class DocumentEngine:
    """Request-mapping core shared by all HTTP handlers.

    Attributes:
        settings: Application configuration.
        adapter: The search adapter; its client handle is shared by all requests.
    """

    def __init__(self, settings: Settings, adapter: SearchAdapter | None = None) -> None:
        self.settings = settings
        self.adapter = adapter or build_adapter(settings)

    async def initialize(self, *, sleep: Callable[[float], Awaitable[object]] = asyncio.sleep) -> None:
        """Block until the adapter has connected, retrying per ``settings.bootstrap``."""
        policy = RetryPolicy.from_settings(self.settings.bootstrap)
        await connect_with_retry(self.adapter.initialize, policy, sleep=sleep)
        logger.info("Document engine initialized (adapter=%s)", self.adapter.name)

    async def shutdown(self) -> None:
        await self.adapter.shutdown()
        logger.info("Document engine shut down")

    # ──────────────────────────────────────────────────────────────────────
    # Create
    # ──────────────────────────────────────────────────────────────────────

    async def create_documents(self, requests: list[DocumentRequest]) -> list[Document]:
        """Assign ids and creation times, then index the whole batch at once.

        An empty batch is a no-op.

        Raises:
            IndexingError: If the bulk request fails; no partial result is reported.
        """
        documents = [Document.from_request(r) for r in requests]
        if not documents:
            return documents

        await self.adapter.bulk_index([d.model_dump(mode="json") for d in documents])
        logger.info("Indexed %d documents", len(documents))
        return documents

    # ──────────────────────────────────────────────────────────────────────
    # Search
    # ──────────────────────────────────────────────────────────────────────

    async def search(self, query: SearchQuery) -> SearchResponse:
        """Run a search and reshape the raw hits into the result envelope.

        Hits keep the engine's relevance order. Every hit is returned; fields of
        ``_source`` that do not decode take their zero value and are logged.

        Raises:
            QueryError: If the engine query fails.
        """
        raw = await self.adapter.search(query)

        documents: list[DocumentResponse] = []
        for hit in raw.documents:
            source = hit.get("_source")
            document, reset = DocumentResponse.from_source(source if isinstance(source, dict) else {})
            if reset:
                logger.warning("Hit %s has undecodable fields %s; using zero values", hit.get("_id"), reset)
            documents.append(document)

        return SearchResponse(
            time=str(raw.took_ms),
            hits=str(raw.total_hits),
            documents=documents,
        )

    async def health_check(self) -> AdapterHealth:
        return await self.adapter.health_check()
