"""Registry of the core OpenShift AI MCP plugins."""

from __future__ import annotations

from typing import TYPE_CHECKING

from openshift_ai_mcp import __version__
from openshift_ai_mcp.hooks import hookimpl
from openshift_ai_mcp.openshift_ai.detection import CORE_GROUP
from openshift_ai_mcp.openshift_ai.resources import RESOURCE_TABLE, ResourceKind
from openshift_ai_mcp.plugin import BasePlugin, PluginMetadata

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from openshift_ai_mcp.server import OpenShiftAIServer


class OpenShiftAIPlugin(BasePlugin):
    """Plugin exposing OpenShift AI status and resource tools."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="openshift-ai",
                version=__version__,
                description="OpenShift AI availability and resource management",
                maintainer="openshift-ai-mcp maintainers",
                requires_groups=[CORE_GROUP],
            )
        )

    @hookimpl
    def openshift_ai_register_tools(self, mcp: FastMCP, server: OpenShiftAIServer) -> None:
        from openshift_ai_mcp.openshift_ai.tools import register_tools

        register_tools(mcp, server)

    @hookimpl
    def openshift_ai_get_resource_kinds(self) -> list[ResourceKind]:
        return list(RESOURCE_TABLE)

    @hookimpl
    def openshift_ai_health_check(self, server: OpenShiftAIServer) -> tuple[bool, str]:
        if server.detector.is_openshift_ai_cluster():
            return True, "OpenShift AI is installed"
        return False, f"OpenShift AI API group {CORE_GROUP} is not served"


def get_core_plugins() -> list[BasePlugin]:
    """Return all core plugin instances."""
    return [OpenShiftAIPlugin()]
