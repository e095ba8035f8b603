"""Plugin base types for OpenShift AI MCP components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from openshift_ai_mcp.hooks import hookimpl

if TYPE_CHECKING:
    from openshift_ai_mcp.openshift_ai.resources import ResourceKind
    from openshift_ai_mcp.server import OpenShiftAIServer


@dataclass
class PluginMetadata:
    """Metadata describing an OpenShift AI MCP plugin."""

    name: str
    """Unique plugin name, e.g., 'openshift-ai'."""

    version: str
    """Plugin version following semver, e.g., '1.0.0'."""

    description: str
    """Human-readable description of what this plugin provides."""

    maintainer: str
    """Maintainer email or team."""

    requires_groups: list[str] = field(default_factory=list)
    """API groups that must be served for this plugin to function.

    If any of these groups is missing, the plugin is marked unhealthy
    but the server keeps running with other plugins.
    """


class BasePlugin:
    """Base plugin with default hook implementations.

    Subclasses override the register hooks they need.
    """

    def __init__(self, metadata: PluginMetadata) -> None:
        self._metadata = metadata

    @property
    def metadata(self) -> PluginMetadata:
        """Return plugin metadata."""
        return self._metadata

    @hookimpl
    def openshift_ai_get_plugin_metadata(self) -> PluginMetadata:
        return self._metadata

    @hookimpl
    def openshift_ai_get_resource_kinds(self) -> list[ResourceKind]:
        return []

    @hookimpl
    def openshift_ai_health_check(self, server: OpenShiftAIServer) -> tuple[bool, str]:
        """Check that every required API group is served."""
        if not self._metadata.requires_groups:
            return True, "No API group requirements"

        missing = [
            group
            for group in self._metadata.requires_groups
            if not server.detector.probe_group(group)[0]
        ]
        if missing:
            return False, f"Missing API groups: {', '.join(missing)}"

        return True, "All required API groups available"
