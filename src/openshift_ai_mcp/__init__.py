"""OpenShift AI MCP Server - MCP server for Red Hat OpenShift AI."""

__version__ = "0.1.0"
