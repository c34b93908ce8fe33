"""Cluster access for the search engine."""

from kube_search_mcp.cluster.base import ResourceLister
from kube_search_mcp.cluster.kubectl import KubectlLister, get_cluster_lister, set_cluster_lister

__all__ = ["ResourceLister", "KubectlLister", "get_cluster_lister", "set_cluster_lister"]
