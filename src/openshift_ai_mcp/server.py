"""FastMCP server definition for OpenShift AI with pluggy-based plugin system."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any

from mcp.server.fastmcp import FastMCP

from openshift_ai_mcp.clients.base import K8sClient
from openshift_ai_mcp.config import OpenShiftAIConfig, get_config
from openshift_ai_mcp.openshift_ai.client import OpenShiftAIClient
from openshift_ai_mcp.openshift_ai.detection import OpenShiftAIDetector, get_availability_policy
from openshift_ai_mcp.plugin_manager import PluginManager
from openshift_ai_mcp.utils.errors import OperationTimeoutError

logger = logging.getLogger(__name__)


class OpenShiftAIServer:
    """OpenShift AI MCP Server with pluggy-based plugin system."""

    def __init__(self, config: OpenShiftAIConfig | None = None) -> None:
        self._config = config or get_config()
        self._k8s_client: K8sClient | None = None
        self._detector: OpenShiftAIDetector | None = None
        self._openshift_ai: OpenShiftAIClient | None = None
        self._mcp: FastMCP | None = None
        self._plugin_manager: PluginManager | None = None

    @property
    def config(self) -> OpenShiftAIConfig:
        """Get server configuration."""
        return self._config

    @property
    def k8s(self) -> K8sClient:
        """Get the Kubernetes client.

        Raises:
            RuntimeError: If server is not running.
        """
        if self._k8s_client is None:
            raise RuntimeError("Server not running. K8s client not available.")
        return self._k8s_client

    @property
    def detector(self) -> OpenShiftAIDetector:
        """Get the OpenShift AI detector.

        Raises:
            RuntimeError: If server is not running.
        """
        if self._detector is None:
            raise RuntimeError("Server not running. Detector not available.")
        return self._detector

    @property
    def openshift_ai(self) -> OpenShiftAIClient:
        """Get the OpenShift AI resource client.

        Raises:
            RuntimeError: If server is not running.
        """
        if self._openshift_ai is None:
            raise RuntimeError("Server not running. OpenShift AI client not available.")
        return self._openshift_ai

    @property
    def mcp(self) -> FastMCP:
        """Get the MCP server instance.

        Raises:
            RuntimeError: If server is not initialized.
        """
        if self._mcp is None:
            raise RuntimeError("Server not initialized.")
        return self._mcp

    @property
    def plugin_manager(self) -> PluginManager:
        """Get the plugin manager.

        Raises:
            RuntimeError: If server is not initialized.
        """
        if self._plugin_manager is None:
            raise RuntimeError("Server not initialized.")
        return self._plugin_manager

    @property
    def plugins(self) -> dict[str, Any]:
        """Get all registered plugins."""
        if self._plugin_manager is None:
            return {}
        return self._plugin_manager.registered_plugins

    @property
    def healthy_plugins(self) -> dict[str, Any]:
        """Get plugins that passed health checks."""
        if self._plugin_manager is None:
            return {}
        return self._plugin_manager.healthy_plugins

    def attach(self, k8s: K8sClient) -> None:
        """Wire the detector and resource client to a connected K8s client."""
        self._k8s_client = k8s
        self._detector = OpenShiftAIDetector.from_client(
            k8s,
            policy=get_availability_policy(self._config.availability_policy.value),
            poll_interval=self._config.availability_poll_interval,
        )
        self._openshift_ai = OpenShiftAIClient(k8s)

    def detach(self) -> None:
        """Drop the K8s client and everything built on it."""
        self._k8s_client = None
        self._detector = None
        self._openshift_ai = None

    def _wait_for_openshift_ai(self) -> None:
        timeout = self._config.availability_timeout
        logger.info(f"Waiting up to {timeout}s for OpenShift AI to become available")
        try:
            self.detector.wait_for_availability(timeout)
        except OperationTimeoutError as e:
            logger.warning(f"{e}; continuing without OpenShift AI")

    def _create_lifespan(self) -> Callable[[Any], AbstractAsyncContextManager[None]]:
        """Create the lifespan context manager for the MCP server."""
        server_self = self

        @asynccontextmanager
        async def lifespan(_app: Any) -> AsyncIterator[None]:
            """Connect K8s on startup, disconnect on shutdown."""
            logger.info("Starting OpenShift AI MCP server...")

            k8s = K8sClient(server_self._config)
            try:
                k8s.connect()
                server_self.attach(k8s)

                if server_self._config.wait_for_availability:
                    await asyncio.to_thread(server_self._wait_for_openshift_ai)

                if server_self._plugin_manager:
                    server_self._plugin_manager.run_health_checks(server_self)

                pm = server_self._plugin_manager
                total = len(pm.registered_plugins) if pm else 0
                healthy = len(pm.healthy_plugins) if pm else 0

                logger.info(
                    f"OpenShift AI MCP server started with {healthy}/{total} plugins active"
                )
                yield
            finally:
                logger.info("Shutting down OpenShift AI MCP server...")
                k8s.disconnect()
                server_self.detach()
                logger.info("OpenShift AI MCP server shut down")

        return lifespan

    def create_mcp(self) -> FastMCP:
        """Create and configure the FastMCP server."""
        self._plugin_manager = PluginManager()

        core_count = self._plugin_manager.load_core_plugins()
        logger.info(f"Loaded {core_count} core plugins")

        external_count = self._plugin_manager.load_entrypoint_plugins()
        logger.info(f"Discovered {external_count} external plugins")

        mcp = FastMCP(
            name="openshift-ai-mcp",
            instructions="MCP server for Red Hat OpenShift AI - lets AI agents check "
            "whether OpenShift AI is installed and manage data science projects, "
            "applications, experiments, models, pipelines and pipeline runs.",
            lifespan=self._create_lifespan(),
            host=self._config.host,
            port=self._config.port,
        )

        self._mcp = mcp

        self._plugin_manager.register_all_tools(mcp, self)
        self._plugin_manager.register_all_resources(mcp, self)

        self._register_core_resources(mcp)

        return mcp

    def _register_core_resources(self, mcp: FastMCP) -> None:
        """Register core MCP resources for cluster information."""

        @mcp.resource("openshift-ai://cluster/status")
        def cluster_status() -> dict:
            """Get OpenShift AI availability for the connected cluster."""
            status = self.detector.check_availability()
            result = status.model_dump(by_alias=True)
            result["connected"] = self.k8s.is_connected
            result["policy"] = self.detector.policy.name
            return result

        @mcp.resource("openshift-ai://cluster/plugins")
        def cluster_plugins() -> dict:
            """Get information about loaded plugins and their health."""
            pm = self._plugin_manager
            if not pm:
                return {"plugins": {}}

            plugin_info = {}
            for name, plugin in pm.registered_plugins.items():
                meta = None
                if hasattr(plugin, "openshift_ai_get_plugin_metadata"):
                    meta = plugin.openshift_ai_get_plugin_metadata()

                plugin_info[name] = {
                    "version": meta.version if meta else "unknown",
                    "description": meta.description if meta else "No description",
                    "maintainer": meta.maintainer if meta else "unknown",
                    "requires_groups": meta.requires_groups if meta else [],
                    "healthy": name in pm.healthy_plugins,
                }

            return {
                "total": len(pm.registered_plugins),
                "active": len(pm.healthy_plugins),
                "resource_kinds": [k.value for k in pm.get_all_resource_kinds()],
                "plugins": plugin_info,
            }

        logger.info("Registered core MCP resources")


# Global server instance
_server: OpenShiftAIServer | None = None


def get_server() -> OpenShiftAIServer:
    """Get the global server instance."""
    global _server
    if _server is None:
        _server = OpenShiftAIServer()
    return _server


def create_server(config: OpenShiftAIConfig | None = None) -> FastMCP:
    """Create and return the MCP server instance."""
    global _server
    _server = OpenShiftAIServer(config)
    return _server.create_mcp()
