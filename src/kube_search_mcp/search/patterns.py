"""Wildcard pattern compilation shared by namespace and name filtering."""

import re

WILDCARD_CHARS = frozenset("*?")


def has_wildcard(text: str) -> bool:
    return any(ch in WILDCARD_CHARS for ch in text)


def wildcard_to_regex(pattern: str) -> str:
    """Translate a shell-style wildcard into a regular expression source.

    Every literal character is escaped first; only then are ``*`` and ``?``
    substituted, so a literal dot can never be turned back into ``.*``.

    >>> wildcard_to_regex("app-*.svc")
    'app\\\\-.*\\\\.svc'
    """
    parts: list[str] = []
    for ch in pattern:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return "".join(parts)


def compile_wildcard(pattern: str) -> re.Pattern[str]:
    """Compile a wildcard into a case-insensitive, unanchored regex.

    Matching uses ``search`` semantics: ``app-*`` matches any name that
    contains ``app-``.
    """
    return re.compile(wildcard_to_regex(pattern), re.IGNORECASE)
