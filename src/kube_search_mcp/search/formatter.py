"""Rendering of ranked search results."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from kube_search_mcp.search.models import MatchResult, ResourceCandidate

MAX_DISPLAY_LABELS = 3

NO_MATCH_HINTS = [
    "Use different keywords or a partial name.",
    "Set fuzzy_tolerance to 'loose'.",
    "Include more resource types.",
    "Check that resources exist in the target namespaces.",
]


def format_age(created_at: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Compact age like kubectl: ``3d``, ``5h`` or ``12m``."""
    if created_at is None:
        return "n/a"
    now = now or datetime.now(timezone.utc)
    seconds = max(0, int((now - created_at).total_seconds()))
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    if days > 0:
        return f"{days}d"
    if hours > 0:
        return f"{hours}h"
    return f"{rest // 60}m"


def summarize_status(candidate: ResourceCandidate) -> str:
    phase = candidate.lookup("status.phase")
    if phase:
        return str(phase)

    conditions = candidate.lookup("status.conditions")
    if isinstance(conditions, list):
        for condition in conditions:
            if isinstance(condition, dict) and condition.get("type") == "Ready":
                return "Ready" if condition.get("status") == "True" else "NotReady"

    replicas = candidate.lookup("spec.replicas")
    ready = candidate.lookup("status.readyReplicas")
    if replicas is not None and ready is not None:
        return f"{ready}/{replicas}"
    return "Unknown"


def _label_text(candidate: ResourceCandidate, limit: int = MAX_DISPLAY_LABELS) -> str:
    pairs = list(candidate.labels.items())[:limit]
    return ", ".join(f"{k}={v}" for k, v in pairs)


def result_entry(result: MatchResult, now: Optional[datetime] = None) -> dict[str, Any]:
    candidate = result.candidate
    return {
        "name": candidate.name,
        "namespace": result.namespace,
        "resource_type": result.kind,
        "match_score": round(result.score, 4),
        "match_reason": result.reason,
        "edit_distance": result.edit_distance,
        "age": format_age(candidate.created_at, now),
        "created_at": candidate.created_at.isoformat() if candidate.created_at else None,
        "status": summarize_status(candidate),
        "labels": dict(candidate.labels),
    }


def _percent(score: float) -> str:
    return f"{score * 100:.0f}%"


def render_detailed(results: Sequence[MatchResult], query: str, now: Optional[datetime] = None) -> str:
    lines = [f'Search results for "{query}" ({len(results)} matches)', ""]
    if not results:
        lines.append("No matches found. Try:")
        lines.extend(f"- {hint}" for hint in NO_MATCH_HINTS)
        return "\n".join(lines)

    for index, result in enumerate(results, start=1):
        candidate = result.candidate
        lines.append(f"{index}. {candidate.name}")
        lines.append(f"   Type: {result.kind}")
        if result.kind != "namespaces":
            lines.append(f"   Namespace: {result.namespace or 'n/a'}")
        lines.append(f"   Match: {_percent(result.score)} ({result.reason})")
        lines.append(f"   Status: {summarize_status(candidate)}")
        lines.append(f"   Age: {format_age(candidate.created_at, now)}")
        labels = _label_text(candidate)
        if labels:
            lines.append(f"   Labels: {labels}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def render_summary(results: Sequence[MatchResult], query: str, now: Optional[datetime] = None) -> str:
    lines = [f'Search results for "{query}" ({len(results)} matches)', ""]
    if not results:
        lines.append("No matches found. Try:")
        lines.extend(f"- {hint}" for hint in NO_MATCH_HINTS)
        return "\n".join(lines)

    grouped: dict[str, list[MatchResult]] = {}
    for result in results:
        grouped.setdefault(result.kind, []).append(result)

    for kind, kind_results in grouped.items():
        lines.append(f"{kind.upper()} ({len(kind_results)}):")
        for result in kind_results:
            line = f"  - {result.candidate.name}"
            if kind != "namespaces":
                line += f" ({result.namespace or 'n/a'})"
            line += f" - {_percent(result.score)} match, {format_age(result.candidate.created_at, now)}"
            lines.append(line)
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def render_results(
    results: Sequence[MatchResult],
    output: str,
    query: str,
    now: Optional[datetime] = None,
) -> Optional[str]:
    """Human-readable rendering; ``json`` output has no text form."""
    if output == "summary":
        return render_summary(results, query, now)
    if output == "detailed":
        return render_detailed(results, query, now)
    return None
