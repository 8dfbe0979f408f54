"""Document models — Creation payloads, stored records, and search hits.

A record travels through three shapes:

- ``DocumentRequest``  — what a client posts (no id, no creation time)
- ``Document``         — what is written to the index (server-assigned id + ``created_at``)
- ``DocumentResponse`` — what a search hit is decoded into (everything except ``id``)
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


def generate_id() -> str:
    """Return a fresh opaque document identifier."""
    return uuid.uuid4().hex


class DocumentRequest(BaseModel):
    """Payload for a single record in a ``POST /documents`` batch.

    Field contents are not validated beyond their JSON types; missing fields
    take their zero value and unknown fields are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    isbn: str = Field(default="", description="ISBN")
    title: str = Field(default="", description="Title")
    subtitle: str = Field(default="", description="Subtitle")
    author: str = Field(default="", description="Author")
    published: datetime | None = Field(default=None, description="Publication timestamp (ISO-8601)")
    publisher: str = Field(default="", description="Publisher")
    pages: int = Field(default=0, description="Page count")
    description: str = Field(default="", description="Free-text description")
    website: str = Field(default="", description="Website URL")


class Document(DocumentRequest):
    """A record as stored in the search index."""

    id: str = Field(default_factory=generate_id, description="Unique document identifier")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Server-assigned creation timestamp (UTC)",
    )

    @classmethod
    def from_request(cls, request: DocumentRequest) -> Document:
        """Build a stored record from a creation payload.

        A new identifier is generated and ``created_at`` is stamped with the
        current UTC time; every other field is copied verbatim.
        """
        return cls(**request.model_dump())


class DocumentResponse(BaseModel):
    """A search hit as returned to clients. Unknown engine-side fields are dropped."""

    model_config = ConfigDict(extra="ignore")

    isbn: str = ""
    title: str = ""
    subtitle: str = ""
    author: str = ""
    published: datetime | None = None
    publisher: str = ""
    pages: int = 0
    description: str = ""
    website: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_source(cls, source: dict[str, Any]) -> tuple[DocumentResponse, list[str]]:
        """Decode a hit's ``_source`` leniently.

        Fields whose stored value does not fit the field type fall back to
        their zero value, so a hit is never lost to one bad field.

        Returns:
            The decoded response and the names of the fields that were reset.
        """
        try:
            return cls.model_validate(source), []
        except ValidationError as e:
            invalid = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        cleaned = {k: v for k, v in source.items() if k not in invalid}
        return cls.model_validate(cleaned), invalid
