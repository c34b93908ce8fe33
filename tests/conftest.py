"""Shared fixtures: an in-memory listing collaborator in place of kubectl."""

from __future__ import annotations

from typing import Any

import pytest

from kube_search_mcp.cluster import set_cluster_lister
from kube_search_mcp.errors import RetrievalError
from kube_search_mcp.search.models import ListRequest, ResourceCandidate


def make_object(
    name: str,
    *,
    namespace: str | None = None,
    labels: dict[str, str] | None = None,
    annotations: dict[str, str] | None = None,
    created: str | None = "2024-01-01T00:00:00Z",
    status: dict[str, Any] | None = None,
    spec: dict[str, Any] | None = None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name}
    if namespace:
        metadata["namespace"] = namespace
    if labels:
        metadata["labels"] = labels
    if annotations:
        metadata["annotations"] = annotations
    if created:
        metadata["creationTimestamp"] = created
    obj: dict[str, Any] = {"metadata": metadata}
    if status is not None:
        obj["status"] = status
    if spec is not None:
        obj["spec"] = spec
    return obj


class FakeLister:
    """Serves canned objects keyed by (kind, namespace) and records calls.

    A value that is an exception instance is raised instead of returned.
    """

    def __init__(
        self,
        objects: dict[tuple[str, str | None], Any] | None = None,
        namespaces: list[str] | Exception | None = None,
    ) -> None:
        self.objects = objects or {}
        self.namespaces = namespaces if namespaces is not None else []
        self.calls: list[ListRequest] = []
        self.namespace_calls = 0

    async def list(self, request: ListRequest) -> list[ResourceCandidate]:
        self.calls.append(request)
        value = self.objects.get((request.kind, request.namespace), [])
        if isinstance(value, Exception):
            raise value
        return [ResourceCandidate.from_object(obj, request.kind, request.namespace) for obj in value]

    async def list_namespaces(self) -> list[str]:
        self.namespace_calls += 1
        if isinstance(self.namespaces, Exception):
            raise self.namespaces
        return list(self.namespaces)

    def listed(self, kind: str | None = None) -> list[tuple[str, str | None]]:
        return [(r.kind, r.namespace) for r in self.calls if kind is None or r.kind == kind]


@pytest.fixture()
def webapp_cluster() -> FakeLister:
    return FakeLister(
        objects={
            ("pods", "default"): [
                make_object("webapp-1", namespace="default", status={"phase": "Running"}),
                make_object("my-webapp-svc", namespace="default", status={"phase": "Running"}),
                make_object("backend", namespace="default", status={"phase": "Running"}),
            ],
        },
        namespaces=["default"],
    )


@pytest.fixture()
def use_lister():
    """Install a lister as the global collaborator for tool calls."""

    def _install(lister: Any) -> Any:
        set_cluster_lister(lister)
        return lister

    yield _install
    set_cluster_lister(None)


@pytest.fixture()
def failing_unit() -> RetrievalError:
    return RetrievalError("Error from server (Forbidden): jobs is forbidden", kind="jobs", namespace="ns1")
