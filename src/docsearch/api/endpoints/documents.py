"""Document endpoints — Bulk creation and fuzzy search.

- ``POST /documents`` — index a JSON array of records in one bulk request.
- ``GET  /documents`` — fuzzy multi-field search with ``skip``/``take`` pagination.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, Query, Response

from docsearch.adapters.base.exceptions import AdapterError
from docsearch.api.deps import get_engine
from docsearch.core.engine import DocumentEngine
from docsearch.errors import CREATE_FAILED, QUERY_NOT_SPECIFIED, SEARCH_FAILED, ApiError, ErrorKind
from docsearch.models.document import DocumentRequest
from docsearch.models.query import SearchQuery, parse_int
from docsearch.models.response import ErrorResponse, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/documents",
    response_class=Response,
    status_code=200,
    summary="Create Documents",
    description=(
        "Index a batch of records. Each record gets a fresh unique `id` and a "
        "server-side `created_at` (UTC); all other fields are stored verbatim. "
        "The batch is submitted as a single bulk request. An empty array is accepted."
    ),
    responses={
        200: {"description": "All documents were indexed (empty body)"},
        400: {"model": ErrorResponse, "description": "Body is not a JSON array of record objects"},
        500: {"model": ErrorResponse, "description": "Bulk indexing failed"},
    },
)
async def create_documents(
    payload: list[DocumentRequest] = Body(...),
    engine: DocumentEngine = Depends(get_engine),
) -> Response:
    try:
        await engine.create_documents(payload)
    except AdapterError as e:
        logger.error("Bulk create of %d documents failed: %s", len(payload), e, exc_info=True)
        raise ApiError(ErrorKind.INDEX_FAILURE, CREATE_FAILED) from e
    return Response(status_code=200)


@router.get(
    "/documents",
    response_model=SearchResponse,
    summary="Search Documents",
    description=(
        "Fuzzy multi-field match of `search` against the indexed documents, "
        "in engine relevance order. `skip` and `take` default to 0 and 10 and "
        "fall back to those defaults when they are not integers."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Search term missing"},
        500: {"model": ErrorResponse, "description": "Search engine query failed"},
    },
)
async def search_documents(
    search: str | None = Query(default=None, description="Search term"),
    search_term: str | None = Query(
        default=None,
        alias="searchTerm",
        description="Legacy name for `search`",
        include_in_schema=False,
    ),
    skip: str | None = Query(default=None, description="Number of hits to skip (default 0)"),
    take: str | None = Query(default=None, description="Maximum number of hits to return (default 10)"),
    engine: DocumentEngine = Depends(get_engine),
) -> SearchResponse:
    term = search or search_term
    if not term:
        raise ApiError(ErrorKind.BAD_REQUEST, QUERY_NOT_SPECIFIED)

    query = SearchQuery(
        term=term,
        skip=parse_int(skip, engine.settings.search.default_skip),
        take=parse_int(take, engine.settings.search.default_take),
    )
    try:
        return await engine.search(query)
    except AdapterError as e:
        logger.error("Search for %r failed: %s", term, e, exc_info=True)
        raise ApiError(ErrorKind.QUERY_FAILURE, SEARCH_FAILED) from e
