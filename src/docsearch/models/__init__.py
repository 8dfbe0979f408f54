"""Data models for documents, search envelopes, and error bodies."""

from docsearch.models.document import Document, DocumentRequest, DocumentResponse
from docsearch.models.response import ErrorResponse, SearchResponse

__all__ = [
    "Document",
    "DocumentRequest",
    "DocumentResponse",
    "ErrorResponse",
    "SearchResponse",
]
