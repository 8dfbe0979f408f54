"""docsearch — HTTP façade for bulk-indexing and fuzzy-searching book records in Elasticsearch."""

__version__ = "0.1.0"
