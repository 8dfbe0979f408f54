"""docsearch Python SDK — Async and sync clients for the docsearch REST API.

Usage::

    # Async
    async with AsyncDocSearchClient("http://localhost:8080") as client:
        await client.create_documents([{"title": "Dune", "author": "Frank Herbert"}])
        response = await client.search("dune")

    # Sync (wraps async client internally)
    client = DocSearchClient("http://localhost:8080")
    response = client.search("dune", take=5)
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar, cast

import httpx

_T = TypeVar("_T")


SearchResult = dict[str, Any]
"""Search response dict (mirrors ``SearchResponse`` JSON: ``time``, ``hits``, ``documents``)."""


class DocSearchAPIError(Exception):
    """Raised when the server answers with a non-2xx status.

    Attributes:
        status_code: HTTP status of the response.
        message: The ``error`` field of the response body, if any.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _raise_for_error(resp: httpx.Response) -> None:
    if resp.is_success:
        return
    try:
        message = str(resp.json().get("error", resp.text))
    except (ValueError, AttributeError):
        message = resp.text
    raise DocSearchAPIError(resp.status_code, message)


# ═══════════════════════════════════════════════════════════════════════════════
# Async client
# ═══════════════════════════════════════════════════════════════════════════════


class AsyncDocSearchClient:
    """Async Python client for the docsearch API.

    Args:
        base_url: docsearch server URL, e.g. ``"http://localhost:8080"``.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            **httpx_kwargs,
        )

    async def __aenter__(self) -> AsyncDocSearchClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def health(self) -> dict[str, Any]:
        """Check server and search engine health."""
        resp = await self._client.get("/health")
        _raise_for_error(resp)
        return cast(dict[str, Any], resp.json())

    async def create_documents(self, documents: list[dict[str, Any]]) -> None:
        """Index a batch of records.

        Args:
            documents: Record payloads (``isbn``, ``title``, ``subtitle``, ``author``,
                ``published``, ``publisher``, ``pages``, ``description``, ``website``).

        Raises:
            DocSearchAPIError: If the server rejects the batch or indexing fails.
        """
        resp = await self._client.post("/documents", json=documents)
        _raise_for_error(resp)

    async def search(
        self,
        term: str,
        *,
        skip: int | None = None,
        take: int | None = None,
    ) -> SearchResult:
        """Search indexed records.

        Args:
            term: Search term.
            skip: Number of hits to skip (server default 0).
            take: Maximum hits to return (server default 10).

        Returns:
            Search response dict with ``time``, ``hits`` and ``documents``.
        """
        params: dict[str, Any] = {"search": term}
        if skip is not None:
            params["skip"] = skip
        if take is not None:
            params["take"] = take
        resp = await self._client.get("/documents", params=params)
        _raise_for_error(resp)
        return cast(dict[str, Any], resp.json())


# ═══════════════════════════════════════════════════════════════════════════════
# Sync client (wraps AsyncDocSearchClient)
# ═══════════════════════════════════════════════════════════════════════════════


class DocSearchClient:
    """Synchronous Python client for the docsearch API.

    Wraps :class:`AsyncDocSearchClient` using ``asyncio.run``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._httpx_kwargs = httpx_kwargs

    def _run(self, coro: Coroutine[Any, Any, _T]) -> _T:
        """Run an async coroutine synchronously."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop and loop.is_running():
            # Already inside an event loop (e.g. Jupyter) — run in a worker thread
            import concurrent.futures

            with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
                return pool.submit(asyncio.run, coro).result()
        return asyncio.run(coro)

    def _make_client(self) -> AsyncDocSearchClient:
        return AsyncDocSearchClient(
            self._base_url,
            timeout=self._timeout,
            **self._httpx_kwargs,
        )

    def health(self) -> dict[str, Any]:
        """Check server and search engine health."""

        async def _call() -> dict[str, Any]:
            async with self._make_client() as c:
                return await c.health()

        return self._run(_call())

    def create_documents(self, documents: list[dict[str, Any]]) -> None:
        """Index a batch of records."""

        async def _call() -> None:
            async with self._make_client() as c:
                await c.create_documents(documents)

        self._run(_call())

    def search(self, term: str, *, skip: int | None = None, take: int | None = None) -> SearchResult:
        """Search indexed records."""

        async def _call() -> SearchResult:
            async with self._make_client() as c:
                return await c.search(term, skip=skip, take=take)

        return self._run(_call())
