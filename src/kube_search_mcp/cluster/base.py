"""Listing collaborator interface consumed by the search engine."""

from __future__ import annotations

from typing import Protocol

from kube_search_mcp.search.models import ListRequest, ResourceCandidate


class ResourceLister(Protocol):
    """Anything that can list cluster objects for the search engine.

    ``list`` returns an empty list when nothing matches and raises
    RetrievalError on any other failure.
    """

    async def list(self, request: ListRequest) -> list[ResourceCandidate]:
        ...

    async def list_namespaces(self) -> list[str]:
        ...
