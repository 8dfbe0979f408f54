"""API error taxonomy.

Every failed request is answered with ``{"error": "<message>"}``; the
``ErrorKind`` decides the HTTP status. Underlying causes are logged
server-side and never placed in the message.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a request failure."""

    BAD_REQUEST = "bad_request"
    INDEX_FAILURE = "index_failure"
    QUERY_FAILURE = "query_failure"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"

    @property
    def status_code(self) -> int:
        return 400 if self is ErrorKind.BAD_REQUEST else 500


class ApiError(Exception):
    """Raised by endpoints to produce an error response."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def __repr__(self) -> str:
        return f"ApiError(kind={self.kind.value!r}, message={self.message!r})"


MALFORMED_BODY = "Malformed request body"
QUERY_NOT_SPECIFIED = "Query not specified"
CREATE_FAILED = "Failed to create documents"
SEARCH_FAILED = "Something went wrong"
UPSTREAM_UNAVAILABLE = "Search engine unavailable"
