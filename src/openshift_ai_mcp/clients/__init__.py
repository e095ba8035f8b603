"""Kubernetes transport for the OpenShift AI MCP server."""

from openshift_ai_mcp.clients.base import K8sClient, get_k8s_client, map_api_exception

__all__ = ["K8sClient", "get_k8s_client", "map_api_exception"]
