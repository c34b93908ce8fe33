"""Two-phase candidate matching.

The quick scan accepts names that lead with the query at full score. The
deep scan then applies the strategy-specific rules (edit distance, word
boundaries, acronyms, labels, field paths, patterns) to the leftovers, but
only when the quick scan found little.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional, Sequence

from kube_search_mcp.search.distance import bounded_levenshtein, distance_score
from kube_search_mcp.search.models import (
    MatchResult,
    ResourceCandidate,
    SearchConfig,
    SearchStrategy,
    StrategyType,
)

QUICK_SCAN_CAP = 10
DEEP_SCAN_THRESHOLD = 5
DEEP_SCAN_CAP = 3

FUZZY_WEIGHT = 0.9
WORD_BOUNDARY_SCORE = 0.8
LABEL_SCORE = 0.7
ACRONYM_SCORE = 0.6
ANNOTATION_SCORE = 0.5
ACRONYM_MAX_QUERY_LENGTH = 4

_WORD_SPLIT = re.compile(r"[-_\s]+")


class Match(NamedTuple):
    score: float
    reason: str
    distance: int = 0


def _mapping_match(mapping, needle: str) -> Optional[tuple[str, str]]:
    for key, value in mapping.items():
        if needle in f"{key}={value}".lower():
            return key, value
    return None


def match_labels(candidate: ResourceCandidate, needle: str, score: float = 1.0) -> Optional[Match]:
    hit = _mapping_match(candidate.labels, needle)
    if hit is None:
        return None
    return Match(score, f"label match ({hit[0]}={hit[1]})")


def match_annotations(candidate: ResourceCandidate, needle: str, score: float = ANNOTATION_SCORE) -> Optional[Match]:
    hit = _mapping_match(candidate.annotations, needle)
    if hit is None:
        return None
    return Match(score, f"annotation match ({hit[0]}={hit[1]})")


def parse_field_selector(selector: str) -> list[tuple[str, str, Optional[str]]]:
    """Split ``a.b=x,c.d!=y`` into ``(path, operator, expected)`` terms.

    A term without an operator yields ``(path, "exists", None)``.
    """
    terms: list[tuple[str, str, Optional[str]]] = []
    for raw in selector.split(","):
        raw = raw.strip()
        if not raw:
            continue
        for operator in ("!=", "==", "="):
            if operator in raw:
                path, expected = raw.split(operator, 1)
                terms.append((path.strip(), "!=" if operator == "!=" else "=", expected.strip()))
                break
        else:
            terms.append((raw, "exists", None))
    return terms


def match_fields(candidate: ResourceCandidate, selector: str) -> Optional[Match]:
    terms = parse_field_selector(selector)
    if not terms:
        return None
    for path, operator, expected in terms:
        value = candidate.lookup(path)
        if operator == "exists":
            if value is None:
                return None
            continue
        contains = value is not None and (expected or "").lower() in str(value).lower()
        if operator == "=" and not contains:
            return None
        if operator == "!=" and contains:
            return None
    return Match(1.0, f"field match ({selector})")


def match_pattern(name: str, pattern: re.Pattern[str]) -> Optional[Match]:
    if pattern.search(name):
        return Match(1.0, "exact pattern match")
    return None


def match_fuzzy_name(name: str, query: str, config: SearchConfig) -> Optional[Match]:
    """Name-based fuzzy rules in priority order; first rule that fires wins."""
    distance = bounded_levenshtein(query, name, config.max_distance)
    if distance is not None:
        score = distance_score(distance, query, name) * FUZZY_WEIGHT
        if score >= config.min_score:
            return Match(score, f"fuzzy name match (distance: {distance})", distance)

    words = [word for word in _WORD_SPLIT.split(name) if word]
    if any(query in word for word in words):
        return Match(WORD_BOUNDARY_SCORE, "word boundary match in name")

    if len(query) <= ACRONYM_MAX_QUERY_LENGTH and "-" in name:
        acronym = "".join(part[0] for part in name.split("-") if part)
        if query in acronym:
            return Match(ACRONYM_SCORE, "acronym match")

    return None


class TwoPhaseMatcher:
    """Scores candidates for one strategy under per-unit and global caps.

    Usage:
        >>> matcher = TwoPhaseMatcher("webapp", strategy, SearchConfig(2, 0.4))
        >>> results = matcher.match(candidates, "pods", "default", remaining=20)
    """

    def __init__(
        self,
        query: str,
        strategy: SearchStrategy,
        config: SearchConfig,
        *,
        include_labels: bool = True,
        include_annotations: bool = False,
    ) -> None:
        self.query = query
        self.query_lower = query.lower()
        self.strategy = strategy
        self.config = config
        self.include_labels = include_labels
        self.include_annotations = include_annotations

    def match(
        self,
        candidates: Sequence[ResourceCandidate],
        kind: str,
        namespace: Optional[str],
        remaining: int,
    ) -> list[MatchResult]:
        """Run both phases over one (kind, namespace) candidate list.

        Never returns more than ``remaining`` results.
        """
        if remaining <= 0 or not candidates:
            return []

        accepted: list[MatchResult] = []
        leftovers: list[ResourceCandidate] = []

        if self.strategy.type is StrategyType.FUZZY:
            quick_cap = min(QUICK_SCAN_CAP, remaining)
            for candidate in candidates:
                found = self.quick_match(candidate) if len(accepted) < quick_cap else None
                if found is not None:
                    accepted.append(self._result(candidate, kind, namespace, found))
                else:
                    leftovers.append(candidate)
        else:
            leftovers = list(candidates)

        if len(accepted) >= DEEP_SCAN_THRESHOLD:
            return accepted

        deep_cap = min(DEEP_SCAN_CAP, remaining - len(accepted))
        deep_accepted = 0
        for candidate in leftovers:
            if deep_accepted >= deep_cap:
                break
            found = self.deep_match(candidate)
            if found is not None:
                accepted.append(self._result(candidate, kind, namespace, found))
                deep_accepted += 1
        return accepted

    def match_uncapped(
        self,
        candidates: Sequence[ResourceCandidate],
        kind: str,
        namespace: Optional[str],
        limit: int,
    ) -> list[MatchResult]:
        """Score every candidate with the same rules, bounded only by ``limit``.

        Used where the candidate list is not a single (kind, namespace) unit,
        such as namespace names, so the per-unit scan caps do not apply.
        """
        accepted: list[MatchResult] = []
        for candidate in candidates:
            if len(accepted) >= limit:
                break
            found = self.quick_match(candidate)
            if found is None:
                found = self.deep_match(candidate)
            if found is not None:
                accepted.append(self._result(candidate, kind, namespace, found))
        return accepted

    def quick_match(self, candidate: ResourceCandidate) -> Optional[Match]:
        if self.strategy.type is StrategyType.FUZZY and candidate.name.lower().startswith(self.query_lower):
            return Match(1.0, "exact substring match in name")
        return None

    def deep_match(self, candidate: ResourceCandidate) -> Optional[Match]:
        strategy_type = self.strategy.type
        if strategy_type is StrategyType.LABELS:
            return match_labels(candidate, self.query_lower)
        if strategy_type is StrategyType.FIELDS:
            return match_fields(candidate, self.strategy.selector)
        if strategy_type is StrategyType.EXACT:
            if self.strategy.pattern is None:
                return None
            return match_pattern(candidate.name, self.strategy.pattern)

        found = match_fuzzy_name(candidate.name.lower(), self.query_lower, self.config)
        if found is None and self.include_labels:
            found = match_labels(candidate, self.query_lower, LABEL_SCORE)
        if found is None and self.include_annotations:
            found = match_annotations(candidate, self.query_lower)
        return found

    @staticmethod
    def _result(candidate: ResourceCandidate, kind: str, namespace: Optional[str], found: Match) -> MatchResult:
        return MatchResult(
            candidate=candidate,
            kind=kind,
            namespace=namespace,
            score=found.score,
            reason=found.reason,
            edit_distance=found.distance,
        )
