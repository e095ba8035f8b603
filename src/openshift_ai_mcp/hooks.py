"""Pluggy hook specifications for OpenShift AI MCP plugins.

This module defines the hook interface that plugins implement to
integrate with the OpenShift AI MCP server.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from openshift_ai_mcp.openshift_ai.resources import ResourceKind
    from openshift_ai_mcp.plugin import PluginMetadata
    from openshift_ai_mcp.server import OpenShiftAIServer

# Project name used for pluggy hook registration
PROJECT_NAME = "openshift_ai_mcp"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Exported for plugins to use
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class OpenShiftAIMCPHookSpec:
    """Hook specifications for OpenShift AI MCP plugins.

    Hooks are called in plugin registration order.
    """

    @hookspec
    def openshift_ai_get_plugin_metadata(self) -> PluginMetadata:
        """Return plugin metadata.

        Returns:
            PluginMetadata instance for this plugin.
        """
        raise NotImplementedError

    @hookspec
    def openshift_ai_register_tools(self, mcp: FastMCP, server: OpenShiftAIServer) -> None:
        """Register MCP tools provided by this plugin.

        Args:
            mcp: The FastMCP server instance to register tools with.
            server: The server instance for accessing the K8s client and config.
        """

    @hookspec
    def openshift_ai_register_resources(
        self, mcp: FastMCP, server: OpenShiftAIServer
    ) -> None:
        """Register MCP resources provided by this plugin.

        Args:
            mcp: The FastMCP server instance to register resources with.
            server: The server instance for accessing the K8s client and config.
        """

    @hookspec
    def openshift_ai_get_resource_kinds(self) -> list[ResourceKind]:
        """Return the resource kinds this plugin serves."""
        raise NotImplementedError

    @hookspec
    def openshift_ai_health_check(self, server: OpenShiftAIServer) -> tuple[bool, str]:
        """Check if this plugin can operate correctly.

        Called during startup. Plugins that fail are reported as unhealthy
        so the server can degrade gracefully when API groups are missing.

        Returns:
            Tuple of (healthy, message).
        """
        raise NotImplementedError
