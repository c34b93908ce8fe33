"""Unified fuzzy resource search engine.

Provides strategy selection, namespace resolution, prioritization, batched
retrieval, two-phase matching and ranking for cluster objects.
"""

from kube_search_mcp.search.engine import UnifiedSearchEngine
from kube_search_mcp.search.models import (
    ListOutcome,
    ListRequest,
    MatchResult,
    ResourceCandidate,
    ScanState,
    SearchConfig,
    SearchOutcome,
    SearchRequest,
    SearchStrategy,
    SortKey,
    StrategyType,
    Tolerance,
)
from kube_search_mcp.search.strategy import select_strategy

__all__ = [
    "UnifiedSearchEngine",
    "ListOutcome",
    "ListRequest",
    "MatchResult",
    "ResourceCandidate",
    "ScanState",
    "SearchConfig",
    "SearchOutcome",
    "SearchRequest",
    "SearchStrategy",
    "SortKey",
    "StrategyType",
    "Tolerance",
    "select_strategy",
]
