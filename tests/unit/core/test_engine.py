"""Tests for the DocumentEngine request-mapping core."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any
from unittest.mock import MagicMock

import pytest

from docsearch.adapters.base.adapter import RawResults
from docsearch.adapters.base.exceptions import ConnectionError, IndexingError
from docsearch.adapters.elasticsearch.adapter import ElasticsearchAdapter
from docsearch.config.settings import Settings
from docsearch.core.bootstrap import UpstreamUnavailableError
from docsearch.core.engine import DocumentEngine, build_adapter
from docsearch.models.document import DocumentRequest
from docsearch.models.query import SearchQuery


class TestBuildAdapter:
    def test_adapter_reflects_settings(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            elasticsearch={"hosts": ["http://es:9200"], "index": "library"},
            search={"match_fields": ["title"], "fuzziness": None},
        )

        adapter = build_adapter(settings)

        assert isinstance(adapter, ElasticsearchAdapter)
        assert adapter.index == "library"
        assert adapter.build_query("dune")["multi_match"] == {
            "query": "dune",
            "fields": ["title"],
            "minimum_should_match": "2",
        }


class TestInitialize:
    async def test_initialize_retries_until_adapter_connects(
        self, engine: DocumentEngine, fake_adapter: MagicMock
    ) -> None:
        fake_adapter.initialize.side_effect = [ConnectionError("down"), ConnectionError("down"), None]
        sleeps: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            sleeps.append(seconds)

        await engine.initialize(sleep=fake_sleep)

        assert fake_adapter.initialize.await_count == 3
        assert sleeps == [engine.settings.bootstrap.retry_interval] * 2

    async def test_initialize_respects_max_attempts(self, fake_adapter: MagicMock) -> None:
        settings = Settings(_env_file=None, bootstrap={"retry_interval": 0, "max_attempts": 2})  # type: ignore[call-arg]
        engine = DocumentEngine(settings, adapter=fake_adapter)
        fake_adapter.initialize.side_effect = ConnectionError("down")

        with pytest.raises(UpstreamUnavailableError):
            await engine.initialize()

        assert fake_adapter.initialize.await_count == 2

    async def test_shutdown_closes_adapter(self, engine: DocumentEngine, fake_adapter: MagicMock) -> None:
        await engine.shutdown()
        fake_adapter.shutdown.assert_awaited_once()


class TestCreateDocuments:
    async def test_create_stamps_id_and_created_at(self, engine: DocumentEngine, dune_payload: dict[str, Any]) -> None:
        before = datetime.now(UTC)

        documents = await engine.create_documents([DocumentRequest(**dune_payload)])

        assert len(documents) == 1
        doc = documents[0]
        assert doc.id
        assert doc.created_at >= before
        assert doc.created_at.tzinfo is not None
        assert doc.website == dune_payload["website"]

    async def test_empty_batch_skips_engine(self, engine: DocumentEngine, fake_adapter: MagicMock) -> None:
        assert await engine.create_documents([]) == []
        fake_adapter.bulk_index.assert_not_awaited()

    async def test_bulk_failure_propagates(self, engine: DocumentEngine, fake_adapter: MagicMock) -> None:
        fake_adapter.bulk_index.side_effect = IndexingError("boom")

        with pytest.raises(IndexingError):
            await engine.create_documents([DocumentRequest(title="Dune")])

    async def test_concurrent_batches_never_collide(self, engine: DocumentEngine, fake_adapter: MagicMock) -> None:
        batches = [[DocumentRequest(title=f"Book {b}-{i}") for i in range(50)] for b in range(20)]

        results = await asyncio.gather(*(engine.create_documents(batch) for batch in batches))

        ids = [doc.id for batch in results for doc in batch]
        assert len(ids) == 1000
        assert len(set(ids)) == 1000
        assert fake_adapter.bulk_index.await_count == 20


class TestSearch:
    async def test_search_reshapes_hits(
        self, engine: DocumentEngine, fake_adapter: MagicMock, dune_hit: dict[str, Any]
    ) -> None:
        fake_adapter.search.return_value = RawResults(total_hits=1, documents=[dune_hit], took_ms=9)

        response = await engine.search(SearchQuery(term="Dune"))

        assert response.time == "9"
        assert response.hits == "1"
        assert response.documents[0].title == "Dune"
        assert response.documents[0].author == "Frank Herbert"
        assert response.documents[0].created_at == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    async def test_search_keeps_hit_with_undecodable_field(
        self, engine: DocumentEngine, fake_adapter: MagicMock, dune_hit: dict[str, Any]
    ) -> None:
        broken = {"_id": "bad", "_source": {"title": "Broken", "pages": "lots"}}
        fake_adapter.search.return_value = RawResults(total_hits=2, documents=[broken, dune_hit], took_ms=1)

        response = await engine.search(SearchQuery(term="Dune"))

        assert [d.title for d in response.documents] == ["Broken", "Dune"]
        assert response.documents[0].pages == 0
        assert response.hits == "2"

    async def test_search_keeps_hit_without_source(self, engine: DocumentEngine, fake_adapter: MagicMock) -> None:
        fake_adapter.search.return_value = RawResults(total_hits=1, documents=[{"_id": "empty"}], took_ms=1)

        response = await engine.search(SearchQuery(term="Dune"))

        assert len(response.documents) == 1
        assert response.documents[0].title == ""

    async def test_search_forwards_query(self, engine: DocumentEngine, fake_adapter: MagicMock) -> None:
        query = SearchQuery(term="herbert", skip=10, take=3)

        await engine.search(query)

        fake_adapter.search.assert_awaited_once_with(query)
