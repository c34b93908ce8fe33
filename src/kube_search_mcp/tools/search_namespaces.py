"""Namespace search tool - pattern, status and label filters over namespaces."""

import logging
from datetime import datetime, timezone
from typing import Any, Literal, Optional

from fastmcp import FastMCP
from pydantic import Field

from kube_search_mcp.cluster import get_cluster_lister
from kube_search_mcp.config import get_search_settings
from kube_search_mcp.contracts import build_ok, build_search_data
from kube_search_mcp.formatting import build_search_error
from kube_search_mcp.search.formatter import format_age
from kube_search_mcp.search.models import ResourceCandidate
from kube_search_mcp.search.namespaces import is_system_namespace, list_namespace_objects
from kube_search_mcp.utils import DEFAULT_NAMESPACE_LIMIT, MAX_SEARCH_LIMIT

logger = logging.getLogger("kube-search-mcp.tools")

NAME_WIDTH = 24
STATUS_WIDTH = 12
AGE_WIDTH = 8


def namespace_entry(ns: ResourceCandidate, now: datetime, show_labels: bool) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "name": ns.name,
        "status": str(ns.lookup("status.phase") or "Unknown"),
        "age": format_age(ns.created_at, now),
        "created_at": ns.created_at.isoformat() if ns.created_at else None,
        "system": is_system_namespace(ns.name),
    }
    if show_labels:
        entry["labels"] = dict(ns.labels)
    return entry


def render_namespace_table(entries: list[dict[str, Any]], show_labels: bool) -> str:
    lines = [f"Found {len(entries)} namespace(s):", ""]
    header = f"{'NAME':<{NAME_WIDTH}}{'STATUS':<{STATUS_WIDTH}}{'AGE':<{AGE_WIDTH}}"
    if show_labels:
        header += "LABELS"
    lines.append(header.rstrip())
    for entry in entries:
        row = f"{entry['name']:<{NAME_WIDTH}}{entry['status']:<{STATUS_WIDTH}}{entry['age']:<{AGE_WIDTH}}"
        if show_labels:
            labels = entry.get("labels") or {}
            row += ",".join(f"{k}={v}" for k, v in labels.items()) or "none"
        lines.append(row.rstrip())
    return "\n".join(lines) + "\n"


def register(mcp: FastMCP) -> None:
    """Register k8s_search_namespaces tool with the MCP server."""

    @mcp.tool()
    async def k8s_search_namespaces(
        pattern: Optional[str] = Field(
            default=None,
            description="Wildcard filter for namespace names, e.g. 'app-*' or '*-prod'.",
        ),
        exclude_system: bool = Field(
            default=True,
            description="Exclude system namespaces (kube-*, openshift-*, default, ...).",
        ),
        status: Literal["Active", "Terminating", "all"] = Field(
            default="Active",
            description="Filter by namespace phase.",
        ),
        label_selector: Optional[str] = Field(
            default=None,
            description="Label selector, e.g. 'environment=production'.",
        ),
        limit: int = Field(
            default=DEFAULT_NAMESPACE_LIMIT,
            ge=1,
            le=MAX_SEARCH_LIMIT,
            description="Maximum namespaces to return.",
        ),
        show_labels: bool = Field(default=False, description="Include namespace labels in output."),
        sort_by: Literal["name", "age", "status"] = Field(
            default="name",
            description="Ordering; 'age' lists the oldest namespaces first.",
        ),
        output: Literal["table", "json", "names"] = Field(
            default="table",
            description="Rendering of the namespace list.",
        ),
    ) -> dict[str, Any]:
        """Search and filter namespaces in the cluster.

        Related tools:
        - k8s_search_resources: Find resources inside the matched namespaces
        """
        try:
            namespaces = await list_namespace_objects(
                get_cluster_lister(),
                get_search_settings(),
                pattern=pattern,
                exclude_system=exclude_system,
                status=status,
                label_selector=label_selector,
                sort_by=sort_by,
                limit=limit,
            )
        except Exception as exc:
            logger.warning("k8s_search_namespaces failed: %s", exc)
            return build_search_error(exc, operation="k8s_search_namespaces")

        now = datetime.now(timezone.utc)
        entries = [namespace_entry(ns, now, show_labels) for ns in namespaces]

        display: Optional[str] = None
        if output == "table":
            display = render_namespace_table(entries, show_labels)
        elif output == "names":
            display = "\n".join(entry["name"] for entry in entries)

        summary: dict[str, Any] = {
            "count": len(entries),
            "limit": limit,
            "status": status,
            "sort_by": sort_by,
            "exclude_system": exclude_system,
        }
        if not entries:
            summary["hints"] = [
                "Loosen the name pattern or drop the label selector.",
                "Set status to 'all' to include terminating namespaces.",
            ]

        payload = build_search_data(
            source="namespaces",
            query=pattern,
            entries=entries,
            summary=summary,
            display=display,
        )
        return build_ok(payload)
