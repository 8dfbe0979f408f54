"""Search adapter layer — Connectors for the backing search engine.

Built-in adapters:
  - elasticsearch: Elasticsearch v8+ (bulk indexing + fuzzy multi_match search)

Implement ``SearchAdapter`` to back docsearch with another engine.
"""
