"""Base adapter interface — Abstract classes for search engine connectors."""

from docsearch.adapters.base.adapter import SearchAdapter

__all__ = ["SearchAdapter"]
