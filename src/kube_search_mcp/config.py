"""Runtime configuration for the Kubernetes search MCP server."""

from dataclasses import dataclass
import os


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_optional(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


DEFAULT_REQUEST_TIMEOUT_S = 15.0
DEFAULT_MAX_RESPONSE_BYTES = 64 * 1024 * 1024
DEFAULT_NAMESPACE_BATCH_SIZE = 50


@dataclass(frozen=True)
class ClusterConfig:
    kubectl: str
    kubeconfig: str | None
    context: str | None
    request_timeout_s: float
    max_response_bytes: int


@dataclass(frozen=True)
class SearchSettings:
    """Knobs threaded explicitly into every search component.

    ``max_namespaces`` of 0 means no bound on the resolved namespace set.
    """

    namespace_batch_size: int = DEFAULT_NAMESPACE_BATCH_SIZE
    max_namespaces: int = 0
    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S
    max_response_bytes: int = DEFAULT_MAX_RESPONSE_BYTES


def get_cluster_config() -> ClusterConfig:
    """Load kubectl access config from environment variables."""
    return ClusterConfig(
        kubectl=os.getenv("KUBE_SEARCH_KUBECTL", "kubectl"),
        kubeconfig=_env_optional("KUBE_SEARCH_KUBECONFIG"),
        context=_env_optional("KUBE_SEARCH_CONTEXT"),
        request_timeout_s=max(1.0, _env_float("KUBE_SEARCH_REQUEST_TIMEOUT_S", DEFAULT_REQUEST_TIMEOUT_S)),
        max_response_bytes=max(1024, _env_int("KUBE_SEARCH_MAX_RESPONSE_BYTES", DEFAULT_MAX_RESPONSE_BYTES)),
    )


def get_search_settings() -> SearchSettings:
    """Load search engine settings from environment variables."""
    cluster = get_cluster_config()
    return SearchSettings(
        namespace_batch_size=max(1, _env_int("KUBE_SEARCH_NAMESPACE_BATCH_SIZE", DEFAULT_NAMESPACE_BATCH_SIZE)),
        max_namespaces=max(0, _env_int("KUBE_SEARCH_MAX_NAMESPACES", 0)),
        request_timeout_s=cluster.request_timeout_s,
        max_response_bytes=cluster.max_response_bytes,
    )
