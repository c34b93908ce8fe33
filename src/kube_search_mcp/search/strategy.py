"""Search strategy selection."""

from kube_search_mcp.errors import InvalidQueryError
from kube_search_mcp.search.models import SearchStrategy, StrategyType
from kube_search_mcp.search.patterns import compile_wildcard, has_wildcard, wildcard_to_regex

FIELD_PATH_KEYWORDS = ("metadata.", "status.", "spec.")


def validate_query(query: str | None) -> str:
    """Return the stripped query or raise InvalidQueryError."""
    if query is None or not query.strip():
        raise InvalidQueryError("Search query cannot be empty or whitespace only")
    return query.strip()


def select_strategy(query: str, mode: str | None = "auto") -> SearchStrategy:
    """Classify a query into a search strategy.

    An explicit ``mode`` other than ``auto`` is used verbatim with the query
    as selector. Auto detection checks, in order: field selector, label
    selector, wildcard pattern, then falls back to fuzzy matching.
    """
    query = validate_query(query)

    if mode and mode != "auto":
        strategy_type = StrategyType(mode)
        pattern = compile_wildcard(query) if strategy_type is StrategyType.EXACT else None
        return SearchStrategy(type=strategy_type, selector=query, pattern=pattern)

    if "=" in query:
        if any(keyword in query for keyword in FIELD_PATH_KEYWORDS):
            return SearchStrategy(type=StrategyType.FIELDS, selector=query)
        return SearchStrategy(type=StrategyType.LABELS, selector=query)

    if has_wildcard(query):
        return SearchStrategy(
            type=StrategyType.EXACT,
            selector=wildcard_to_regex(query),
            pattern=compile_wildcard(query),
        )

    return SearchStrategy(type=StrategyType.FUZZY, selector=query)
