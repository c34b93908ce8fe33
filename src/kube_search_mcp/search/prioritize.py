"""Reordering of namespaces and kinds so likely matches are scanned first.

Both functions only reorder; they never drop entries, and they are stable
so the same query and input order always produce the same scan order.
"""

from typing import Sequence

ENVIRONMENT_TOKENS = ("dev", "prod", "test", "demo")

KIND_KEYWORDS: dict[str, tuple[str, ...]] = {
    "pods": ("pod", "container"),
    "services": ("svc", "service"),
    "deployments": ("deploy", "app"),
    "jobs": ("job",),
    "cronjobs": ("job", "cron"),
    "configmaps": ("configmap", "config"),
    "secrets": ("secret",),
    "ingresses": ("ingress",),
    "statefulsets": ("statefulset", "stateful"),
    "daemonsets": ("daemonset", "daemon"),
    "replicasets": ("replicaset",),
}

KEYWORD_PRIORITY_BOOST = 1000


def prioritize_namespaces(namespaces: Sequence[str], query: str) -> list[str]:
    """Move namespaces that look related to the query to the front.

    Order: names containing the query, then names sharing an environment
    token (dev/prod/test/demo) with the query, then everything else.
    """
    query_lower = query.lower()
    env_tokens = [token for token in ENVIRONMENT_TOKENS if token in query_lower]

    direct: list[str] = []
    environment: list[str] = []
    rest: list[str] = []
    for namespace in namespaces:
        name = namespace.lower()
        if query_lower and query_lower in name:
            direct.append(namespace)
        elif any(token in name for token in env_tokens):
            environment.append(namespace)
        else:
            rest.append(namespace)
    return direct + environment + rest


def kind_priority(kind: str, position: int, query_lower: str) -> int:
    keywords = KIND_KEYWORDS.get(kind, ())
    if any(keyword in query_lower for keyword in keywords):
        return position - KEYWORD_PRIORITY_BOOST
    return position


def prioritize_kinds(kinds: Sequence[str], query: str) -> list[str]:
    """Order kinds so those hinted by the query come first."""
    query_lower = query.lower()
    ranked = sorted(
        enumerate(kinds),
        key=lambda item: kind_priority(item[1], item[0], query_lower),
    )
    return [kind for _, kind in ranked]
