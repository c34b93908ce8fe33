"""Kubernetes search MCP tool implementations."""

from . import search_namespaces, search_resources

__all__ = [
    "search_resources",
    "search_namespaces",
]
