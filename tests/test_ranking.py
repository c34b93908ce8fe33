"""Tests for result ordering and truncation."""

from datetime import datetime, timezone

from kube_search_mcp.search.models import MatchResult, ResourceCandidate, SortKey
from kube_search_mcp.search.ranking import rank, sort_results


def _result(name, score, namespace="default", created=None):
    candidate = ResourceCandidate(name=name, kind="pods", namespace=namespace, created_at=created)
    return MatchResult(candidate=candidate, kind="pods", namespace=namespace, score=score, reason="test")


def test_relevance_is_descending_and_stable():
    results = [_result("a", 0.8), _result("b", 1.0), _result("c", 0.8)]
    assert [r.name for r in sort_results(results)] == ["b", "a", "c"]


def test_name_and_namespace_ordering():
    results = [_result("b", 1.0, "ns2"), _result("a", 0.5, "ns3"), _result("c", 0.7, "ns1")]
    assert [r.name for r in sort_results(results, SortKey.NAME)] == ["a", "b", "c"]
    assert [r.namespace for r in sort_results(results, "namespace")] == ["ns1", "ns2", "ns3"]


def test_age_newest_first_missing_last():
    old = datetime(2023, 1, 1, tzinfo=timezone.utc)
    new = datetime(2024, 1, 1, tzinfo=timezone.utc)
    results = [_result("undated", 1.0), _result("old", 1.0, created=old), _result("new", 1.0, created=new)]
    assert [r.name for r in sort_results(results, SortKey.AGE)] == ["new", "old", "undated"]


def test_rank_truncates_to_limit():
    results = [_result(str(i), i / 10) for i in range(10)]
    ranked = rank(results, SortKey.RELEVANCE, 3)
    assert [r.name for r in ranked] == ["9", "8", "7"]
    assert rank(results, SortKey.RELEVANCE, 0) == []
