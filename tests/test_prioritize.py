"""Tests for namespace and kind prioritization."""

from kube_search_mcp.search.prioritize import prioritize_kinds, prioritize_namespaces


def test_direct_namespace_hits_first():
    ordered = prioritize_namespaces(["alpha", "billing", "payments-api", "zeta"], "payments")
    assert ordered[0] == "payments-api"
    assert sorted(ordered) == sorted(["alpha", "billing", "payments-api", "zeta"])


def test_environment_namespaces_next():
    ordered = prioritize_namespaces(["alpha", "shop-prod", "prod-api-x", "beta"], "api-prod")
    assert ordered == ["shop-prod", "prod-api-x", "alpha", "beta"]


def test_namespace_order_is_stable_without_hints():
    names = ["c", "a", "b"]
    assert prioritize_namespaces(names, "webapp") == names


def test_kind_keyword_moves_kind_first():
    assert prioritize_kinds(["pods", "deployments", "services"], "web-svc") == ["services", "pods", "deployments"]


def test_kind_order_unchanged_without_keywords():
    kinds = ["pods", "deployments", "services"]
    assert prioritize_kinds(kinds, "nginx") == kinds


def test_multiple_keyword_hits_keep_relative_order():
    kinds = ["pods", "jobs", "cronjobs"]
    assert prioritize_kinds(kinds, "nightly-cron-job") == ["jobs", "cronjobs", "pods"]
