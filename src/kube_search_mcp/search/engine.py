"""Unified fuzzy resource search engine.

One ``search`` call runs a single scan:

    query -> strategy + namespace set -> prioritized kinds/namespaces
          -> (for each kind, for each namespace batch) fetch -> match
          -> early exit once the limit is reached -> rank

Kinds and batches run strictly one after another so the limit check between
batches stays meaningful; only the listing calls inside one batch overlap.
Results found early can therefore win over better matches that live in
namespaces never visited, trading completeness for bounded latency.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable, Optional

from kube_search_mcp.config import SearchSettings
from kube_search_mcp.search.matcher import TwoPhaseMatcher
from kube_search_mcp.search.models import (
    MatchResult,
    ResourceCandidate,
    ScanState,
    SearchConfig,
    SearchOutcome,
    SearchRequest,
)
from kube_search_mcp.search.namespaces import resolve_namespaces
from kube_search_mcp.search.prioritize import prioritize_kinds, prioritize_namespaces
from kube_search_mcp.search.ranking import rank
from kube_search_mcp.search.retrieval import BatchRetriever, batched
from kube_search_mcp.search.strategy import select_strategy
from kube_search_mcp.utils import dedupe

if TYPE_CHECKING:
    from kube_search_mcp.cluster.base import ResourceLister

logger = logging.getLogger("kube-search-mcp.search")

NAMESPACE_KIND = "namespaces"
RECENT_WINDOW = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UnifiedSearchEngine:
    """Searches cluster objects by free-form query under a result budget.

    Usage:
        >>> engine = UnifiedSearchEngine(get_cluster_lister(), get_search_settings())
        >>> outcome = await engine.search(SearchRequest(query="webapp"))
        >>> [r.name for r in outcome.results]
        ['webapp-1', 'my-webapp-svc']
    """

    def __init__(
        self,
        lister: "ResourceLister",
        settings: Optional[SearchSettings] = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.lister = lister
        self.settings = settings or SearchSettings()
        self.retriever = BatchRetriever(lister, self.settings)
        self.clock = clock
        self.state = ScanState.NOT_STARTED

    async def search(self, request: SearchRequest) -> SearchOutcome:
        """Run one search invocation.

        Raises:
            InvalidQueryError: blank query, before any retrieval
            NamespaceDiscoveryError: namespace listing failed; no partial results
        """
        self.state = ScanState.NOT_STARTED
        try:
            strategy = select_strategy(request.query, request.search_mode)
            query = request.query.strip()
            config = SearchConfig.for_tolerance(request.tolerance)
            namespaces = await resolve_namespaces(
                self.lister,
                namespaces=request.namespaces,
                pattern=request.namespace_pattern,
                exclude_system=request.exclude_system_namespaces,
                max_namespaces=self.settings.max_namespaces,
            )
        except Exception:
            self.state = ScanState.FAILED
            raise
        self.state = ScanState.NAMESPACES_RESOLVED

        limit = max(0, request.limit)
        kinds = dedupe(list(request.resource_types))
        outcome = SearchOutcome(
            query=query,
            strategy=strategy,
            results=[],
            search_type=NAMESPACE_KIND if kinds == [NAMESPACE_KIND] else "resources",
        )
        accumulator: list[MatchResult] = []

        if NAMESPACE_KIND in kinds:
            namespace_matcher = TwoPhaseMatcher(query, strategy, config, include_labels=False)
            candidates = [ResourceCandidate(name=ns, kind=NAMESPACE_KIND, namespace=ns) for ns in namespaces]
            for result in namespace_matcher.match_uncapped(candidates, NAMESPACE_KIND, None, limit):
                accumulator.append(
                    MatchResult(
                        candidate=result.candidate,
                        kind=NAMESPACE_KIND,
                        namespace=result.candidate.name,
                        score=result.score,
                        reason=result.reason,
                        edit_distance=result.edit_distance,
                    )
                )
            outcome.kinds_scanned.append(NAMESPACE_KIND)

        matcher = TwoPhaseMatcher(
            query,
            strategy,
            config,
            include_labels=request.include_labels,
            include_annotations=request.include_annotations,
        )
        ordered_namespaces = prioritize_namespaces(namespaces, query)
        ordered_kinds = prioritize_kinds([kind for kind in kinds if kind != NAMESPACE_KIND], query)
        created_after = self.clock() - RECENT_WINDOW if request.recent else None
        scanned_namespaces: set[str] = set()

        self.state = ScanState.SCANNING
        for kind in ordered_kinds:
            if len(accumulator) >= limit:
                break
            outcome.kinds_scanned.append(kind)
            for batch in batched(ordered_namespaces, self.settings.namespace_batch_size):
                if len(accumulator) >= limit:
                    break
                unit_outcomes = await self.retriever.fetch_batch(kind, batch, created_after=created_after)
                outcome.units_requested += len(unit_outcomes)
                for unit in unit_outcomes:
                    namespace = unit.request.namespace
                    scanned_namespaces.add(namespace or "")
                    if not unit.ok:
                        outcome.failed_units.append(
                            {"kind": kind, "namespace": namespace, "error": str(unit.error)}
                        )
                    remaining = limit - len(accumulator)
                    if remaining <= 0:
                        continue
                    accumulator.extend(matcher.match(unit.candidates(), kind, namespace, remaining))

        outcome.limit_reached = len(accumulator) >= limit
        self.state = ScanState.LIMIT_REACHED if outcome.limit_reached else ScanState.EXHAUSTED
        outcome.namespaces_scanned = len(scanned_namespaces)
        logger.debug(
            "Scan for %r finished (%s): %d matches, %d units, %d failed",
            query,
            self.state.value,
            len(accumulator),
            outcome.units_requested,
            len(outcome.failed_units),
        )

        outcome.results = rank(accumulator, request.sort_by, limit)
        self.state = ScanState.RANKED
        outcome.state = self.state
        return outcome
