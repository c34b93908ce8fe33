"""Ordering and truncation of accumulated matches."""

from typing import Sequence

from kube_search_mcp.search.models import MatchResult, SortKey


def sort_results(results: Sequence[MatchResult], sort_by: SortKey | str = SortKey.RELEVANCE) -> list[MatchResult]:
    """Return results ordered by ``sort_by``; every ordering is stable.

    - relevance: score, highest first
    - name: resource name, lexicographic
    - age: creation time, newest first; unknown creation times sort last
    - namespace: namespace name, lexicographic
    """
    sort_by = SortKey(sort_by)
    if sort_by is SortKey.NAME:
        return sorted(results, key=lambda r: r.candidate.name)
    if sort_by is SortKey.NAMESPACE:
        return sorted(results, key=lambda r: r.namespace or "")
    if sort_by is SortKey.AGE:
        dated = [r for r in results if r.candidate.created_at is not None]
        undated = [r for r in results if r.candidate.created_at is None]
        dated.sort(key=lambda r: r.candidate.created_at, reverse=True)
        return dated + undated
    return sorted(results, key=lambda r: r.score, reverse=True)


def rank(results: Sequence[MatchResult], sort_by: SortKey | str, limit: int) -> list[MatchResult]:
    """Sort and truncate to ``limit``."""
    return sort_results(results, sort_by)[: max(0, limit)]
