"""Adapter-specific exceptions."""


class AdapterError(Exception):
    """Base exception for adapter errors."""


class ConnectionError(AdapterError):
    """Raised when the adapter cannot connect to the search backend."""


class IndexingError(AdapterError):
    """Raised when a bulk index operation fails, fully or partially."""


class QueryError(AdapterError):
    """Raised when a search query fails."""


class ConfigurationError(AdapterError):
    """Raised when adapter configuration is invalid."""
