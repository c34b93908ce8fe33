"""Exception taxonomy for the resource search engine."""


class KubeSearchError(Exception):
    """Base class for search failures."""


class InvalidQueryError(KubeSearchError):
    """Query is empty or whitespace only."""


class NamespaceDiscoveryError(KubeSearchError):
    """Listing namespaces failed; the whole search is aborted."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Failed to list namespaces: {cause}")


class RetrievalError(KubeSearchError):
    """A single (kind, namespace) listing call failed.

    Recovered locally by the retrieval engine as an empty candidate list.
    """

    def __init__(self, message: str, *, kind: str | None = None, namespace: str | None = None) -> None:
        self.kind = kind
        self.namespace = namespace
        super().__init__(message)
