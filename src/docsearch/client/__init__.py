"""docsearch Python SDK — Client library for the docsearch API.

Quick start::

    from docsearch.client import DocSearchClient

    client = DocSearchClient("http://localhost:8080")
    client.create_documents([{"title": "Dune", "author": "Frank Herbert"}])
    response = client.search("dune")
"""

from docsearch.client.client import AsyncDocSearchClient, DocSearchAPIError, DocSearchClient

__all__ = ["AsyncDocSearchClient", "DocSearchAPIError", "DocSearchClient"]
