"""Unified resource search tool - fuzzy/label/field/pattern search across namespaces."""

import logging
from datetime import datetime, timezone
from typing import Any

from fastmcp import FastMCP

from kube_search_mcp.cluster import get_cluster_lister
from kube_search_mcp.config import get_search_settings
from kube_search_mcp.contracts import build_ok, build_search_data
from kube_search_mcp.formatting import build_search_error
from kube_search_mcp.search import SearchRequest, SortKey, Tolerance, UnifiedSearchEngine
from kube_search_mcp.search.formatter import NO_MATCH_HINTS, render_results, result_entry
from kube_search_mcp.utils import (
    DEFAULT_RESOURCE_TYPES,
    ExcludeSystemNamespaces,
    FuzzyTolerance,
    IncludeAnnotations,
    IncludeLabels,
    NamespaceList,
    NamespacePattern,
    OutputFormat,
    RecentOnly,
    ResourceQuery,
    ResourceTypes,
    SearchLimit,
    SearchMode,
    SortBy,
)

logger = logging.getLogger("kube-search-mcp.tools")


def register(mcp: FastMCP) -> None:
    """Register k8s_search_resources tool with the MCP server."""

    @mcp.tool()
    async def k8s_search_resources(
        query: ResourceQuery,
        resource_types: ResourceTypes = None,
        namespaces: NamespaceList = None,
        namespace_pattern: NamespacePattern = None,
        exclude_system_namespaces: ExcludeSystemNamespaces = False,
        search_mode: SearchMode = "auto",
        fuzzy_tolerance: FuzzyTolerance = "moderate",
        limit: SearchLimit = 20,
        include_labels: IncludeLabels = True,
        include_annotations: IncludeAnnotations = False,
        sort_by: SortBy = "relevance",
        output: OutputFormat = "detailed",
        recent: RecentOnly = False,
    ) -> dict[str, Any]:
        """Search Kubernetes resources by name, typo, wildcard, label or field.

        Handles typos and partial names (fuzzy), wildcards like 'web*' (exact),
        'app=nginx' (labels) and 'status.phase=Running' (fields).

        Names that start with the query score 1.0. Names that only contain it
        further in (e.g. 'my-webapp-svc' for 'webapp') score 0.8, and at most
        3 such matches are kept per resource type and namespace. The same cap
        applies to wildcard, label and field matches. Query by the leading
        part of the name to collect more of them.

        Scanning stops as soon as `limit` matches are collected, so on large
        clusters a better match in a namespace visited later can be missed.
        Narrow with `namespaces` or `namespace_pattern` for complete results.

        Related tools:
        - k8s_search_namespaces: Find namespaces by pattern, status or labels
        """
        request = SearchRequest(
            query=query,
            resource_types=tuple(resource_types or DEFAULT_RESOURCE_TYPES),
            namespaces=tuple(namespaces) if namespaces else None,
            namespace_pattern=namespace_pattern,
            exclude_system_namespaces=exclude_system_namespaces,
            search_mode=search_mode,
            tolerance=Tolerance(fuzzy_tolerance),
            limit=limit,
            include_labels=include_labels,
            include_annotations=include_annotations,
            sort_by=SortKey(sort_by),
            recent=recent,
        )
        engine = UnifiedSearchEngine(get_cluster_lister(), get_search_settings())

        try:
            outcome = await engine.search(request)
        except Exception as exc:
            logger.warning("k8s_search_resources failed: %s", exc)
            return build_search_error(exc, operation="k8s_search_resources")

        now = datetime.now(timezone.utc)
        summary: dict[str, Any] = {
            "count": len(outcome.results),
            "limit": limit,
            "limit_reached": outcome.limit_reached,
            "sort_by": sort_by,
            "fuzzy_tolerance": fuzzy_tolerance,
            "namespaces_scanned": outcome.namespaces_scanned,
            "kinds_scanned": outcome.kinds_scanned,
            "failed_units": len(outcome.failed_units),
        }
        if not outcome.results:
            summary["hints"] = list(NO_MATCH_HINTS)

        payload = build_search_data(
            source=outcome.search_type,
            query=outcome.query,
            strategy=outcome.strategy.type.value,
            entries=[result_entry(result, now) for result in outcome.results],
            summary=summary,
            display=render_results(outcome.results, output, outcome.query, now),
        )
        return build_ok(payload)
