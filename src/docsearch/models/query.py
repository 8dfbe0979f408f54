"""Search query model."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

# Optional sign followed by ASCII digits only; no whitespace, underscores or other numerals
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class SearchQuery(BaseModel):
    """A single search request after parameter parsing."""

    term: str = Field(min_length=1, description="Search term matched against the configured fields")
    skip: int = Field(default=0, description="Number of leading hits to skip")
    take: int = Field(default=10, description="Maximum number of hits to return")


def parse_int(value: str | None, default: int) -> int:
    """Parse a query-string integer, falling back to ``default`` when absent or invalid."""
    if value is None or not _INT_PATTERN.fullmatch(value):
        return default
    return int(value)
