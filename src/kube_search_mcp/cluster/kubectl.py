"""kubectl-backed listing collaborator.

Every call is an argv vector handed to ``asyncio.create_subprocess_exec``;
selectors are passed as separate arguments and never interpolated into a
shell string.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

from kube_search_mcp.config import (
    DEFAULT_MAX_RESPONSE_BYTES,
    DEFAULT_REQUEST_TIMEOUT_S,
    get_cluster_config,
)
from kube_search_mcp.errors import RetrievalError
from kube_search_mcp.search.models import ListRequest, ResourceCandidate

logger = logging.getLogger("kube-search-mcp.cluster")

NO_RESOURCES_MARKER = "no resources found"


def _first_line(text: str) -> str:
    text = text.strip()
    return text.splitlines()[0] if text else ""


class KubectlLister:
    """Async request/response adapter over ``kubectl get -o json``."""

    def __init__(
        self,
        kubectl: str = "kubectl",
        *,
        kubeconfig: Optional[str] = None,
        context: Optional[str] = None,
        request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S,
        max_response_bytes: int = DEFAULT_MAX_RESPONSE_BYTES,
    ) -> None:
        self.kubectl = kubectl
        self.kubeconfig = kubeconfig
        self.context = context
        self.request_timeout_s = request_timeout_s
        self.max_response_bytes = max_response_bytes

    def build_args(self, request: ListRequest) -> list[str]:
        args = [self.kubectl]
        if self.kubeconfig:
            args += ["--kubeconfig", self.kubeconfig]
        if self.context:
            args += ["--context", self.context]
        args += ["get", request.kind]
        if request.namespace:
            args += ["-n", request.namespace]
        if request.label_selector:
            args += ["-l", request.label_selector]
        if request.field_selector:
            args += ["--field-selector", request.field_selector]
        args += ["-o", "json", f"--request-timeout={max(1, int(request.timeout_s))}s"]
        return args

    async def _run(self, args: list[str], timeout_s: float) -> tuple[int, bytes, bytes]:
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise RetrievalError(f"kubectl not found: {self.kubectl}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout_s)
        except asyncio.TimeoutError as exc:
            proc.kill()
            await proc.wait()
            raise RetrievalError(f"kubectl timed out after {timeout_s:.1f}s") from exc
        return proc.returncode or 0, stdout, stderr

    async def list(self, request: ListRequest) -> list[ResourceCandidate]:
        """List objects of one kind in one namespace (or cluster-wide)."""
        args = self.build_args(request)
        returncode, stdout, stderr = await self._run(args, request.timeout_s)
        err_text = stderr.decode("utf-8", errors="replace")

        if returncode != 0:
            if NO_RESOURCES_MARKER in err_text.lower():
                return []
            raise RetrievalError(
                _first_line(err_text) or f"kubectl exited with code {returncode}",
                kind=request.kind,
                namespace=request.namespace,
            )

        if len(stdout) > request.max_bytes:
            raise RetrievalError(
                f"response exceeded {request.max_bytes} bytes",
                kind=request.kind,
                namespace=request.namespace,
            )
        if not stdout.strip():
            return []

        try:
            payload: Any = json.loads(stdout)
        except json.JSONDecodeError as exc:
            raise RetrievalError(
                f"invalid JSON from kubectl: {exc}", kind=request.kind, namespace=request.namespace
            ) from exc

        items = payload.get("items") if isinstance(payload, dict) else None
        if items is None:
            items = [payload] if isinstance(payload, dict) and payload.get("metadata") else []

        candidates: list[ResourceCandidate] = []
        for item in items:
            try:
                candidate = ResourceCandidate.from_object(item, request.kind, request.namespace)
            except ValueError:
                logger.debug("Skipping %s item without a name in %s", request.kind, request.namespace)
                continue
            if request.created_after is not None:
                if candidate.created_at is None or candidate.created_at < request.created_after:
                    continue
            candidates.append(candidate)
        return candidates

    async def list_namespaces(self) -> list[str]:
        request = ListRequest(
            kind="namespaces",
            timeout_s=self.request_timeout_s,
            max_bytes=self.max_response_bytes,
        )
        return [candidate.name for candidate in await self.list(request)]


_lister: Any | None = None


def get_cluster_lister() -> Any:
    """Return the global listing collaborator with lazy initialization."""
    global _lister
    if _lister is None:
        cfg = get_cluster_config()
        _lister = KubectlLister(
            cfg.kubectl,
            kubeconfig=cfg.kubeconfig,
            context=cfg.context,
            request_timeout_s=cfg.request_timeout_s,
            max_response_bytes=cfg.max_response_bytes,
        )
        logger.info("Using kubectl lister (%s, context=%s)", cfg.kubectl, cfg.context or "current")
    return _lister


def set_cluster_lister(lister: Any | None) -> None:
    """Replace the global listing collaborator; None restores lazy creation."""
    global _lister
    _lister = lister
