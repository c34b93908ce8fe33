"""Tests for two-phase candidate matching."""

import pytest

from conftest import make_object
from kube_search_mcp.search.matcher import (
    DEEP_SCAN_CAP,
    QUICK_SCAN_CAP,
    TwoPhaseMatcher,
    match_fields,
    match_fuzzy_name,
    parse_field_selector,
)
from kube_search_mcp.search.models import ResourceCandidate, SearchConfig, Tolerance
from kube_search_mcp.search.strategy import select_strategy


def _candidates(*objects, kind="pods", namespace="default"):
    return [ResourceCandidate.from_object(obj, kind, namespace) for obj in objects]


def _matcher(query, mode="auto", tolerance=Tolerance.MODERATE, **kwargs):
    return TwoPhaseMatcher(query, select_strategy(query, mode), SearchConfig.for_tolerance(tolerance), **kwargs)


def test_webapp_scenario_scores():
    candidates = _candidates(make_object("webapp-1"), make_object("my-webapp-svc"), make_object("backend"))
    results = _matcher("webapp").match(candidates, "pods", "default", remaining=20)
    scores = {r.name: r.score for r in results}

    assert scores["webapp-1"] == 1.0
    assert scores["my-webapp-svc"] == pytest.approx(0.8)
    assert "backend" not in scores


def test_label_selector_scenario():
    candidates = _candidates(
        make_object("api", labels={"env": "prod", "app": "api"}),
        make_object("worker", labels={"env": "staging"}),
    )
    results = _matcher("env=prod").match(candidates, "pods", "default", remaining=20)

    assert [r.name for r in results] == ["api"]
    assert results[0].score == 1.0
    assert results[0].reason == "label match (env=prod)"


def test_typo_matches_by_edit_distance():
    candidates = _candidates(make_object("nginx"))
    results = _matcher("ngnix").match(candidates, "pods", "default", remaining=20)

    assert len(results) == 1
    assert results[0].edit_distance == 2
    assert results[0].score == pytest.approx(0.6 * 0.9)
    assert results[0].reason == "fuzzy name match (distance: 2)"


def test_strict_tolerance_rejects_distant_typo():
    candidates = _candidates(make_object("nginx"))
    assert _matcher("ngnix", tolerance=Tolerance.STRICT).match(candidates, "pods", "default", 20) == []


def test_acronym_match():
    candidates = _candidates(make_object("api-gateway-service"))
    results = _matcher("ags").match(candidates, "pods", "default", remaining=20)
    assert results[0].score == pytest.approx(0.6)
    assert results[0].reason == "acronym match"


def test_label_fallback_for_fuzzy_query():
    candidates = _candidates(make_object("frontend-7d9f", labels={"team": "payments"}))
    results = _matcher("payments").match(candidates, "pods", "default", remaining=20)
    assert results[0].score == pytest.approx(0.7)
    assert results[0].reason == "label match (team=payments)"


def test_label_fallback_disabled():
    candidates = _candidates(make_object("frontend-7d9f", labels={"team": "payments"}))
    assert _matcher("payments", include_labels=False).match(candidates, "pods", "default", 20) == []


def test_annotation_match_only_when_enabled():
    candidates = _candidates(make_object("frontend-7d9f", annotations={"owner": "billing-team"}))
    assert _matcher("billing").match(candidates, "pods", "default", 20) == []

    results = _matcher("billing", include_annotations=True).match(candidates, "pods", "default", 20)
    assert results[0].score == pytest.approx(0.5)
    assert results[0].reason.startswith("annotation match")


def test_quick_scan_cap_and_remaining_budget():
    candidates = _candidates(*(make_object(f"web-{i}") for i in range(15)))

    assert len(_matcher("web").match(candidates, "pods", "default", remaining=20)) == QUICK_SCAN_CAP
    assert len(_matcher("web").match(candidates, "pods", "default", remaining=4)) <= 4


def test_deep_scan_skipped_when_quick_scan_finds_enough():
    objects = [make_object(f"web-{i}") for i in range(5)] + [make_object("my-web-svc")]
    results = _matcher("web").match(_candidates(*objects), "pods", "default", remaining=20)
    assert "my-web-svc" not in {r.name for r in results}


def test_deep_scan_cap():
    objects = [make_object(f"a-web-{i}") for i in range(6)]
    results = _matcher("web").match(_candidates(*objects), "pods", "default", remaining=20)
    assert len(results) == DEEP_SCAN_CAP


def test_zero_remaining_returns_nothing():
    candidates = _candidates(make_object("webapp-1"))
    assert _matcher("webapp").match(candidates, "pods", "default", remaining=0) == []


def test_exact_pattern_strategy():
    candidates = _candidates(make_object("web-1"), make_object("api-1"), make_object("my-web"))
    results = _matcher("web*").match(candidates, "pods", "default", remaining=20)
    assert [r.name for r in results] == ["web-1", "my-web"]
    assert all(r.reason == "exact pattern match" for r in results)


def test_field_selector_strategy():
    candidates = _candidates(
        make_object("a", status={"phase": "Running"}),
        make_object("b", status={"phase": "Pending"}),
    )
    results = _matcher("status.phase=Running").match(candidates, "pods", "default", remaining=20)
    assert [r.name for r in results] == ["a"]
    assert results[0].reason == "field match (status.phase=Running)"


def test_parse_field_selector_terms():
    assert parse_field_selector("status.phase!=Failed, spec.nodeName==n1, spec.replicas") == [
        ("status.phase", "!=", "Failed"),
        ("spec.nodeName", "=", "n1"),
        ("spec.replicas", "exists", None),
    ]


def test_match_fields_negation_and_missing_path():
    candidate = _candidates(make_object("a", status={"phase": "Running"}))[0]
    assert match_fields(candidate, "status.phase!=Failed") is not None
    assert match_fields(candidate, "status.phase!=Running") is None
    assert match_fields(candidate, "spec.nodeName=n1") is None


def test_fuzzy_rules_first_match_wins():
    found = match_fuzzy_name("webapp", "webap", SearchConfig.for_tolerance("moderate"))
    assert found.reason.startswith("fuzzy name match")


def test_interior_matches_use_deep_scan_cap():
    candidates = _candidates(*(make_object(f"my-webapp-{i}") for i in range(6)))
    results = _matcher("webapp").match(candidates, "pods", "default", remaining=20)

    assert len(results) == DEEP_SCAN_CAP
    assert all(r.score == pytest.approx(0.8) for r in results)


def test_match_uncapped_scores_every_candidate():
    candidates = _candidates(*(make_object(f"team-{i:02d}") for i in range(15)), make_object("other"))
    results = _matcher("team").match_uncapped(candidates, "namespaces", None, limit=20)

    assert len(results) == 15
    assert len(_matcher("team").match_uncapped(candidates, "namespaces", None, limit=4)) == 4
