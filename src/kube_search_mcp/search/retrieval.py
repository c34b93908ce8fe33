"""Batched, bounded-concurrency retrieval of candidates per (kind, namespace)."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Iterator, Optional, Sequence

from kube_search_mcp.config import SearchSettings
from kube_search_mcp.errors import RetrievalError
from kube_search_mcp.search.models import ListOutcome, ListRequest

if TYPE_CHECKING:
    from kube_search_mcp.cluster.base import ResourceLister

logger = logging.getLogger("kube-search-mcp.search")


def batched(items: Sequence[str], size: int) -> Iterator[list[str]]:
    size = max(1, size)
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


class BatchRetriever:
    """Fans out one listing call per namespace in a batch and fans back in.

    Failures never propagate: each unit resolves to a ListOutcome whose
    error variant unwraps to zero candidates.
    """

    def __init__(self, lister: "ResourceLister", settings: SearchSettings) -> None:
        self.lister = lister
        self.settings = settings

    def build_request(
        self,
        kind: str,
        namespace: Optional[str],
        *,
        label_selector: Optional[str] = None,
        field_selector: Optional[str] = None,
        created_after: Optional[datetime] = None,
    ) -> ListRequest:
        return ListRequest(
            kind=kind,
            namespace=namespace,
            label_selector=label_selector,
            field_selector=field_selector,
            created_after=created_after,
            timeout_s=self.settings.request_timeout_s,
            max_bytes=self.settings.max_response_bytes,
        )

    async def fetch_unit(self, request: ListRequest) -> ListOutcome:
        try:
            items = await self.lister.list(request)
        except RetrievalError as exc:
            logger.warning("Listing %s in %s failed: %s", request.kind, request.namespace, exc)
            return ListOutcome(request=request, error=exc)
        except Exception as exc:
            logger.warning("Listing %s in %s failed: %s", request.kind, request.namespace, exc)
            return ListOutcome(
                request=request,
                error=RetrievalError(str(exc) or type(exc).__name__, kind=request.kind, namespace=request.namespace),
            )
        return ListOutcome(request=request, items=tuple(items))

    async def fetch_batch(
        self,
        kind: str,
        namespaces: Sequence[str],
        *,
        created_after: Optional[datetime] = None,
    ) -> list[ListOutcome]:
        """List ``kind`` in every namespace of the batch concurrently.

        Outcomes come back in the order of ``namespaces``, not completion order.
        """
        requests = [self.build_request(kind, namespace, created_after=created_after) for namespace in namespaces]
        return list(await asyncio.gather(*(self.fetch_unit(request) for request in requests)))
