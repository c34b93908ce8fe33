"""Validation models and utilities for Kubernetes search MCP tools."""

from typing import Annotated, Literal, Optional

from pydantic import Field


# Search limits
DEFAULT_SEARCH_LIMIT = 20
MAX_SEARCH_LIMIT = 500
DEFAULT_NAMESPACE_LIMIT = 20

DEFAULT_RESOURCE_TYPES = ["pods", "deployments", "services"]

ResourceTypeName = Literal[
    "pods",
    "deployments",
    "services",
    "replicasets",
    "statefulsets",
    "daemonsets",
    "jobs",
    "cronjobs",
    "configmaps",
    "secrets",
    "ingresses",
    "namespaces",
]


def dedupe(values: list[str]) -> list[str]:
    """Drop duplicates and blanks while keeping first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.add(value)
            out.append(value)
    return out


# Free-form search query; blank queries are rejected by the engine with a
# structured invalid_query error rather than a schema error.
ResourceQuery = Annotated[
    str,
    Field(
        ...,
        description=(
            "Search query: resource name, partial name, typo, wildcard pattern "
            "('web*'), label selector ('app=nginx') or field selector "
            "('status.phase=Running')."
        ),
    ),
]

ResourceTypes = Annotated[
    Optional[list[ResourceTypeName]],
    Field(
        default=None,
        description=(
            "Resource kinds to search (default: pods, deployments, services). "
            "Including 'namespaces' also matches namespace names."
        ),
    ),
]

NamespaceList = Annotated[
    Optional[list[str]],
    Field(default=None, description="Explicit namespaces to search. Omit to discover all namespaces."),
]

NamespacePattern = Annotated[
    Optional[str],
    Field(default=None, description="Wildcard filter for discovered namespace names, e.g. 'app-*'."),
]

ExcludeSystemNamespaces = Annotated[
    bool,
    Field(default=False, description="Skip kube-*, openshift-*, default and other system namespaces."),
]

SearchMode = Annotated[
    Literal["auto", "fuzzy", "exact", "labels", "fields"],
    Field(default="auto", description="Matching strategy; 'auto' detects it from the query."),
]

FuzzyTolerance = Annotated[
    Literal["strict", "moderate", "loose"],
    Field(default="moderate", description="How lenient fuzzy name matching is."),
]

SearchLimit = Annotated[
    int,
    Field(
        default=DEFAULT_SEARCH_LIMIT,
        ge=1,
        le=MAX_SEARCH_LIMIT,
        description=f"Maximum number of results (1-{MAX_SEARCH_LIMIT}). Scanning stops once reached.",
    ),
]

IncludeLabels = Annotated[
    bool,
    Field(default=True, description="Also match the query against labels."),
]

IncludeAnnotations = Annotated[
    bool,
    Field(default=False, description="Also match the query against annotations."),
]

SortBy = Annotated[
    Literal["relevance", "name", "age", "namespace"],
    Field(default="relevance", description="Result ordering."),
]

OutputFormat = Annotated[
    Literal["detailed", "summary", "json"],
    Field(default="detailed", description="Rendering of the result set."),
]

RecentOnly = Annotated[
    bool,
    Field(default=False, description="Only include resources created in the last 24 hours."),
]
