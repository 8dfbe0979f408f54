"""Response models — Search result envelope and error body."""

from __future__ import annotations

from pydantic import BaseModel, Field

from docsearch.models.document import DocumentResponse


class SearchResponse(BaseModel):
    """Result envelope for ``GET /documents``.

    ``time`` and ``hits`` are string-encoded on the wire.
    """

    time: str = Field(description="Engine-reported query time in milliseconds")
    hits: str = Field(description="Total number of matching documents")
    documents: list[DocumentResponse] = Field(
        default_factory=list,
        description="Matched documents in engine relevance order",
    )


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    error: str = Field(description="Human-readable error message")
