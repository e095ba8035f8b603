"""Pluggy-based plugin manager for the OpenShift AI MCP server."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pluggy

from openshift_ai_mcp.hooks import PROJECT_NAME, OpenShiftAIMCPHookSpec

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from openshift_ai_mcp.openshift_ai.resources import ResourceKind
    from openshift_ai_mcp.plugin import PluginMetadata
    from openshift_ai_mcp.server import OpenShiftAIServer

logger = logging.getLogger(__name__)

# Entry point group scanned for external plugins
ENTRYPOINT_GROUP = "openshift_ai_mcp.plugins"


class PluginManager:
    """Registers plugins and dispatches hook calls to them."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(OpenShiftAIMCPHookSpec)
        self._plugins: dict[str, Any] = {}
        self._healthy: dict[str, Any] = {}

    @property
    def hook(self) -> Any:
        """Get the pluggy hook relay."""
        return self._pm.hook

    @property
    def registered_plugins(self) -> dict[str, Any]:
        """Get all registered plugins by name."""
        return dict(self._plugins)

    @property
    def healthy_plugins(self) -> dict[str, Any]:
        """Get plugins that passed their last health check."""
        return dict(self._healthy)

    def register_plugin(self, plugin: Any, name: str | None = None) -> str:
        """Register a plugin.

        Args:
            plugin: Object implementing any of the hooks.
            name: Plugin name; taken from the plugin's metadata when omitted.

        Returns:
            The name the plugin was registered under.
        """
        if name is None:
            get_metadata = getattr(plugin, "openshift_ai_get_plugin_metadata", None)
            name = get_metadata().name if get_metadata else type(plugin).__name__

        self._pm.register(plugin, name=name)
        self._plugins[name] = plugin
        logger.debug(f"Registered plugin: {name}")
        return name

    def unregister_plugin(self, name: str) -> None:
        """Unregister a plugin by name."""
        self._pm.unregister(name=name)
        self._plugins.pop(name, None)
        self._healthy.pop(name, None)
        logger.debug(f"Unregistered plugin: {name}")

    def load_core_plugins(self) -> int:
        """Register the built-in plugins.

        Returns:
            Number of plugins registered.
        """
        from openshift_ai_mcp.registry import get_core_plugins

        plugins = get_core_plugins()
        for plugin in plugins:
            self.register_plugin(plugin)
        return len(plugins)

    def load_entrypoint_plugins(self) -> int:
        """Register plugins advertised through package entry points.

        Returns:
            Number of plugins loaded.
        """
        before = set(self._pm.get_plugins())
        count = self._pm.load_setuptools_entrypoints(ENTRYPOINT_GROUP)
        for plugin in set(self._pm.get_plugins()) - before:
            name = self._pm.get_name(plugin)
            if name:
                self._plugins[name] = plugin
        return count

    def get_all_metadata(self) -> list[PluginMetadata]:
        """Collect metadata from every plugin that provides it."""
        return list(self.hook.openshift_ai_get_plugin_metadata())

    def get_all_resource_kinds(self) -> list[ResourceKind]:
        """Collect the resource kinds served by all plugins."""
        kinds: list[ResourceKind] = []
        for result in self.hook.openshift_ai_get_resource_kinds():
            kinds.extend(result)
        return kinds

    def register_all_tools(self, mcp: FastMCP, server: OpenShiftAIServer) -> None:
        """Let every plugin register its tools."""
        self.hook.openshift_ai_register_tools(mcp=mcp, server=server)

    def register_all_resources(self, mcp: FastMCP, server: OpenShiftAIServer) -> None:
        """Let every plugin register its resources."""
        self.hook.openshift_ai_register_resources(mcp=mcp, server=server)

    def run_health_checks(self, server: OpenShiftAIServer) -> dict[str, tuple[bool, str]]:
        """Run health checks on all plugins.

        Plugins without a health check are treated as healthy. A health
        check that raises marks its plugin unhealthy.

        Returns:
            Mapping of plugin name to (healthy, message).
        """
        results: dict[str, tuple[bool, str]] = {}
        self._healthy.clear()

        for name, plugin in self._plugins.items():
            check = getattr(plugin, "openshift_ai_health_check", None)
            if check is None:
                results[name] = (True, "No health check implemented")
            else:
                try:
                    results[name] = check(server)
                except Exception as e:
                    logger.warning(f"Health check for plugin {name} failed: {e}")
                    results[name] = (False, f"Health check error: {e}")

            healthy, message = results[name]
            if healthy:
                self._healthy[name] = plugin
                logger.debug(f"Plugin {name} is healthy: {message}")
            else:
                logger.warning(f"Plugin {name} is unhealthy: {message}")

        return results
