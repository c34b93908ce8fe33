"""Namespace discovery and filtering."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from kube_search_mcp.config import SearchSettings
from kube_search_mcp.errors import NamespaceDiscoveryError
from kube_search_mcp.search.models import ListRequest, ResourceCandidate
from kube_search_mcp.search.patterns import compile_wildcard
from kube_search_mcp.utils import dedupe

if TYPE_CHECKING:
    from kube_search_mcp.cluster.base import ResourceLister

logger = logging.getLogger("kube-search-mcp.search")

SYSTEM_NAMESPACES = frozenset(
    {
        "kube-system",
        "kube-public",
        "kube-node-lease",
        "default",
        "kubernetes-dashboard",
        "ingress-nginx",
        "cert-manager",
        "monitoring",
        "logging",
        "istio-system",
        "linkerd",
    }
)
SYSTEM_NAMESPACE_PREFIXES = ("kube-", "openshift-")


def is_system_namespace(name: str) -> bool:
    return name in SYSTEM_NAMESPACES or name.startswith(SYSTEM_NAMESPACE_PREFIXES)


def filter_namespaces(
    names: Iterable[str],
    *,
    exclude_system: bool = False,
    pattern: Optional[str] = None,
) -> list[str]:
    """Apply system-namespace exclusion, then the wildcard name pattern."""
    filtered = list(names)
    if exclude_system:
        filtered = [name for name in filtered if not is_system_namespace(name)]
    if pattern:
        regex = compile_wildcard(pattern)
        filtered = [name for name in filtered if regex.search(name)]
    return filtered


def _bound(names: list[str], max_namespaces: int) -> list[str]:
    if max_namespaces > 0:
        return names[:max_namespaces]
    return names


async def resolve_namespaces(
    lister: ResourceLister,
    *,
    namespaces: Optional[Sequence[str]] = None,
    pattern: Optional[str] = None,
    exclude_system: bool = False,
    max_namespaces: int = 0,
) -> list[str]:
    """Return the candidate namespace set for a search.

    An explicit namespace set bypasses discovery entirely. Otherwise every
    namespace is listed and filtered; a failure of that listing call raises
    NamespaceDiscoveryError since there is no fallback set.
    """
    if namespaces:
        return _bound(dedupe(list(namespaces)), max_namespaces)

    try:
        discovered = await lister.list_namespaces()
    except Exception as exc:
        logger.warning("Namespace discovery failed: %s", exc)
        raise NamespaceDiscoveryError(exc) from exc

    filtered = filter_namespaces(dedupe(discovered), exclude_system=exclude_system, pattern=pattern)
    logger.debug("Resolved %d of %d namespaces", len(filtered), len(discovered))
    return _bound(filtered, max_namespaces)


def _namespace_sort_key(sort_by: str):
    if sort_by == "age":
        return lambda ns: (ns.created_at is None, ns.created_at.timestamp() if ns.created_at else 0.0, ns.name)
    if sort_by == "status":
        return lambda ns: (str(ns.lookup("status.phase") or ""), ns.name)
    return lambda ns: ns.name


async def list_namespace_objects(
    lister: ResourceLister,
    settings: SearchSettings,
    *,
    pattern: Optional[str] = None,
    exclude_system: bool = True,
    status: str = "Active",
    label_selector: Optional[str] = None,
    sort_by: str = "name",
    limit: int = 0,
) -> list[ResourceCandidate]:
    """List namespace objects with server-side and client-side filters.

    The label selector and status phase are pushed to the listing call;
    system exclusion and the wildcard pattern are applied locally. Oldest
    namespaces come first when sorting by age. ``limit`` of 0 disables
    truncation. Listing failures raise NamespaceDiscoveryError.
    """
    field_selector = f"status.phase={status}" if status and status != "all" else None
    request = ListRequest(
        kind="namespaces",
        label_selector=label_selector or None,
        field_selector=field_selector,
        timeout_s=settings.request_timeout_s,
        max_bytes=settings.max_response_bytes,
    )
    try:
        objects = await lister.list(request)
    except Exception as exc:
        logger.warning("Namespace listing failed: %s", exc)
        raise NamespaceDiscoveryError(exc) from exc

    keep = set(filter_namespaces([ns.name for ns in objects], exclude_system=exclude_system, pattern=pattern))
    selected = [ns for ns in objects if ns.name in keep]
    selected.sort(key=_namespace_sort_key(sort_by))
    if limit > 0:
        selected = selected[:limit]
    return selected
