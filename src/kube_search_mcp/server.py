"""Kubernetes Search MCP Server - fuzzy cluster resource search over MCP."""

import argparse
import logging

from fastmcp import FastMCP

from kube_search_mcp import __version__
from kube_search_mcp.tools import search_namespaces, search_resources

mcp = FastMCP(
    "Kubernetes Search MCP Server",
    instructions=(
        "Kubernetes resource search MCP server. "
        "Finds cluster objects by partial name, typo, wildcard, label or field "
        "selector across many namespaces, and filters namespaces by pattern, "
        "status and labels. Read-only; uses the local kubectl configuration."
    ),
)

logger = logging.getLogger("kube-search-mcp.server")

# Register search tools
search_resources.register(mcp)
search_namespaces.register(mcp)


def main():
    """Entry point for the Kubernetes search MCP server."""
    parser = argparse.ArgumentParser(
        prog="kube-search-mcp",
        description="Kubernetes Search MCP Server - fuzzy cluster resource search over MCP",
    )
    parser.add_argument("--version", "-v", action="version", version=f"kube-search-mcp {__version__}")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind when using http/sse transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind when using http/sse transport (default: 8000)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level for kube-search-mcp loggers (default: WARNING)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("kube-search-mcp").setLevel(args.log_level)

    run_kwargs: dict = {"transport": args.transport, "show_banner": False}
    if args.transport in ("http", "sse"):
        run_kwargs["host"] = args.host
        run_kwargs["port"] = args.port

    # Suppress noisy uvicorn shutdown messages (e.g. "Cancel N running task(s)")
    logging.getLogger("uvicorn.error").setLevel(logging.CRITICAL)

    logger.info("Starting kube-search-mcp %s (transport=%s)", __version__, args.transport)
    try:
        mcp.run(**run_kwargs)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
