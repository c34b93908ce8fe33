"""Error rendering helpers for MCP tool outputs."""

from __future__ import annotations

from typing import Any

from kube_search_mcp.config import get_cluster_config
from kube_search_mcp.contracts import build_error
from kube_search_mcp.errors import InvalidQueryError, NamespaceDiscoveryError


def summarize_cluster_error(exc: BaseException) -> str:
    text = str(exc).strip()
    lowered = text.lower()

    if "kubectl not found" in lowered:
        return "kubectl binary not found"
    if "timed out" in lowered:
        return "cluster request timed out"
    if "forbidden" in lowered:
        return "access forbidden by RBAC"
    if "connection refused" in lowered or "unable to connect" in lowered:
        return "cannot connect to cluster API server"
    if not text:
        return "unknown cluster error"
    return text.splitlines()[0]


def build_search_error(exc: Exception, *, operation: str) -> dict[str, Any]:
    """Map a fatal search failure onto a unified error envelope."""
    if isinstance(exc, InvalidQueryError):
        return build_error(
            "invalid_query",
            str(exc),
            {"operation": operation, "action": "Provide a non-empty search query"},
        )

    cfg = get_cluster_config()
    details: dict[str, Any] = {
        "operation": operation,
        "context": cfg.context or "current",
    }
    if isinstance(exc, NamespaceDiscoveryError):
        details["reason"] = summarize_cluster_error(exc.cause)
        details["action"] = "Check kubectl access to namespaces, or pass namespaces explicitly"
        return build_error("namespace_discovery_failed", "Failed to list namespaces", details)

    details["reason"] = summarize_cluster_error(exc)
    return build_error("search_failed", f"{operation} failed", details)
