"""Data model for the unified resource search engine.

Candidates are the objects returned by the listing collaborator, wrapped so
that the required metadata is typed while the kind-specific remainder
(``status``/``spec``) stays an opaque mapping reached through
:func:`lookup_path`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional

from kube_search_mcp.errors import RetrievalError


class StrategyType(Enum):
    """Matching algorithm family chosen for a query."""

    FUZZY = "fuzzy"
    EXACT = "exact"
    LABELS = "labels"
    FIELDS = "fields"


class Tolerance(Enum):
    STRICT = "strict"
    MODERATE = "moderate"
    LOOSE = "loose"


class SortKey(Enum):
    RELEVANCE = "relevance"
    NAME = "name"
    AGE = "age"
    NAMESPACE = "namespace"


class ScanState(Enum):
    """Lifecycle of a single search invocation."""

    NOT_STARTED = "not_started"
    NAMESPACES_RESOLVED = "namespaces_resolved"
    SCANNING = "scanning"
    LIMIT_REACHED = "limit_reached"
    EXHAUSTED = "exhausted"
    RANKED = "ranked"
    FAILED = "failed"


@dataclass(frozen=True)
class SearchStrategy:
    """Strategy plus the selector derived from the query.

    ``pattern`` is only set for :attr:`StrategyType.EXACT`.
    """

    type: StrategyType
    selector: str
    pattern: Optional[re.Pattern[str]] = None


@dataclass(frozen=True)
class SearchConfig:
    max_distance: int
    min_score: float

    @classmethod
    def for_tolerance(cls, tolerance: Tolerance | str) -> "SearchConfig":
        tolerance = Tolerance(tolerance)
        return _TOLERANCE_PRESETS[tolerance]


_TOLERANCE_PRESETS = {
    Tolerance.STRICT: SearchConfig(max_distance=1, min_score=0.8),
    Tolerance.MODERATE: SearchConfig(max_distance=2, min_score=0.4),
    Tolerance.LOOSE: SearchConfig(max_distance=4, min_score=0.2),
}


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 creation timestamp into an aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def lookup_path(obj: Any, path: str) -> Any:
    """Resolve a dotted path (``status.phase``) into nested mappings.

    Returns None as soon as a segment is missing. Numeric segments index
    into lists.
    """
    current = obj
    for segment in path.split("."):
        if not segment:
            return None
        if isinstance(current, Mapping):
            current = current.get(segment)
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            current = current[index] if index < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


@dataclass(frozen=True)
class ResourceCandidate:
    """A cluster object returned by the listing collaborator."""

    name: str
    kind: str
    namespace: Optional[str] = None
    labels: Mapping[str, str] = field(default_factory=dict)
    annotations: Mapping[str, str] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    raw: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_object(cls, obj: Mapping[str, Any], kind: str, namespace: Optional[str] = None) -> "ResourceCandidate":
        """Build a candidate from a kubectl JSON item.

        Raises ValueError when ``metadata.name`` is missing.
        """
        metadata = obj.get("metadata") or {}
        name = metadata.get("name")
        if not name:
            raise ValueError("resource object has no metadata.name")
        return cls(
            name=str(name),
            kind=kind,
            namespace=metadata.get("namespace") or namespace,
            labels={str(k): str(v) for k, v in (metadata.get("labels") or {}).items()},
            annotations={str(k): str(v) for k, v in (metadata.get("annotations") or {}).items()},
            created_at=parse_timestamp(metadata.get("creationTimestamp")),
            raw=obj,
        )

    def lookup(self, path: str) -> Any:
        return lookup_path(self.raw, path)


@dataclass(frozen=True)
class MatchResult:
    """A scored candidate produced by the matcher."""

    candidate: ResourceCandidate
    kind: str
    namespace: Optional[str]
    score: float
    reason: str
    edit_distance: int = 0

    def __post_init__(self) -> None:
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"score out of range: {self.score}")
        if self.edit_distance < 0:
            raise ValueError("edit_distance must be >= 0")

    @property
    def name(self) -> str:
        return self.candidate.name


@dataclass(frozen=True)
class ListRequest:
    """Structured request handed to the listing collaborator."""

    kind: str
    namespace: Optional[str] = None
    label_selector: Optional[str] = None
    field_selector: Optional[str] = None
    created_after: Optional[datetime] = None
    timeout_s: float = 15.0
    max_bytes: int = 64 * 1024 * 1024


@dataclass(frozen=True)
class ListOutcome:
    """Per-unit retrieval result: either candidates or the error that occurred."""

    request: ListRequest
    items: tuple[ResourceCandidate, ...] = ()
    error: Optional[RetrievalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def candidates(self) -> list[ResourceCandidate]:
        if self.error is not None:
            return []
        return list(self.items)


@dataclass(frozen=True)
class SearchRequest:
    """All parameters of one search invocation."""

    query: str
    resource_types: tuple[str, ...] = ("pods", "deployments", "services")
    namespaces: Optional[tuple[str, ...]] = None
    namespace_pattern: Optional[str] = None
    exclude_system_namespaces: bool = False
    search_mode: str = "auto"
    tolerance: Tolerance = Tolerance.MODERATE
    limit: int = 20
    include_labels: bool = True
    include_annotations: bool = False
    sort_by: SortKey = SortKey.RELEVANCE
    recent: bool = False


@dataclass
class SearchOutcome:
    """Ranked results plus scan statistics for one invocation."""

    query: str
    strategy: SearchStrategy
    results: list[MatchResult]
    search_type: str = "resources"
    state: ScanState = ScanState.RANKED
    namespaces_scanned: int = 0
    kinds_scanned: list[str] = field(default_factory=list)
    units_requested: int = 0
    failed_units: list[dict[str, Optional[str]]] = field(default_factory=list)
    limit_reached: bool = False
