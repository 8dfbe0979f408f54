"""Integration test fixtures — a live Elasticsearch with a throwaway index.

Expects Elasticsearch (security disabled) at localhost:9200, e.g.::

    docker run -d -p 9200:9200 -e discovery.type=single-node \
        -e xpack.security.enabled=false elasticsearch:8.13.0

Tests are skipped when it is not reachable.
"""

from __future__ import annotations

import time
import uuid

import httpx
import pytest

ES_HOST = "http://localhost:9200"

MAPPING = {
    "mappings": {
        "properties": {
            "id": {"type": "keyword"},
            "isbn": {"type": "keyword"},
            "title": {"type": "text"},
            "subtitle": {"type": "text"},
            "author": {"type": "text"},
            "published": {"type": "date"},
            "publisher": {"type": "keyword"},
            "pages": {"type": "integer"},
            "description": {"type": "text"},
            "website": {"type": "keyword"},
            "created_at": {"type": "date"},
        }
    }
}


def _wait_for_service(url: str, timeout: float = 30.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=5)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(1)
    return False


@pytest.fixture(scope="session")
def elasticsearch_ready() -> str:
    """Ensure Elasticsearch is running."""
    if not _wait_for_service(ES_HOST):
        pytest.skip(f"Elasticsearch not available at {ES_HOST}")
    return ES_HOST


@pytest.fixture
def test_index(elasticsearch_ready: str):
    """Create a fresh index with the books mapping and drop it afterwards."""
    index = f"docsearch-test-{uuid.uuid4().hex[:8]}"
    with httpx.Client(base_url=elasticsearch_ready, timeout=30) as client:
        client.put(f"/{index}", json=MAPPING).raise_for_status()
        yield index
        client.delete(f"/{index}", params={"ignore_unavailable": "true"})
