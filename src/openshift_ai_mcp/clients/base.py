"""Base Kubernetes client used as the OpenShift AI transport."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Generator

from kubernetes import client, config
from kubernetes.client import ApiException
from kubernetes.dynamic import DynamicClient
from kubernetes.dynamic.exceptions import ResourceNotFoundError
from kubernetes.dynamic.resource import Resource
from urllib3.exceptions import HTTPError

from openshift_ai_mcp.config import SERVICE_ACCOUNT_TOKEN, AuthMode, OpenShiftAIConfig, get_config
from openshift_ai_mcp.openshift_ai.detection import NodeCapacity
from openshift_ai_mcp.openshift_ai.resources import GroupVersionResource
from openshift_ai_mcp.utils.errors import (
    AuthenticationError,
    InternalError,
    NotFoundError,
    OpenShiftAIError,
    PermissionDeniedError,
    ResourceExistsError,
    UnavailableError,
)

logger = logging.getLogger(__name__)

# Failures raised below the API layer, e.g. an unreachable API server
TRANSPORT_ERRORS = (HTTPError, OSError)


def map_api_exception(
    e: ApiException,
    action: str,
    resource: str,
    name: str | None = None,
    namespace: str | None = None,
) -> OpenShiftAIError:
    """Translate an ApiException into the OpenShift AI error taxonomy.

    The caller is expected to raise the result ``from e``.
    """
    target = f"{resource} '{name}'" if name else resource
    if e.status == 404:
        return NotFoundError(resource, name or "", namespace)
    if e.status == 409:
        return ResourceExistsError(resource, name or "", namespace)
    if e.status in (401, 403):
        return PermissionDeniedError(action, target)
    return InternalError(f"Failed to {action} {target}", cause=e)


class K8sClient:
    """Kubernetes client exposing the calls the OpenShift AI core consumes.

    Supports multiple authentication modes:
    - auto: Try in-cluster first, fall back to kubeconfig
    - kubeconfig: Use kubeconfig file with optional context
    - token: Use explicit API server URL and token
    """

    def __init__(self, config_obj: OpenShiftAIConfig | None = None) -> None:
        self._config = config_obj or get_config()
        self._api_client: client.ApiClient | None = None
        self._dynamic_client: DynamicClient | None = None
        self._core_v1: client.CoreV1Api | None = None
        self._resource_cache: dict[str, Resource] = {}

    def connect(self) -> None:
        """Establish connection to Kubernetes API."""
        try:
            self._api_client = self._create_api_client()
            self._dynamic_client = DynamicClient(self._api_client)
            self._core_v1 = client.CoreV1Api(self._api_client)
            logger.info("Connected to Kubernetes API")
        except AuthenticationError:
            raise
        except Exception as e:
            raise AuthenticationError(f"Failed to connect to Kubernetes API: {e}") from e

    def disconnect(self) -> None:
        """Close connection to Kubernetes API."""
        if self._api_client:
            self._api_client.close()
            self._api_client = None
            self._dynamic_client = None
            self._core_v1 = None
            self._resource_cache.clear()
            logger.info("Disconnected from Kubernetes API")

    @property
    def is_connected(self) -> bool:
        """Check if client is connected."""
        return self._api_client is not None

    def _create_api_client(self) -> client.ApiClient:
        """Create API client based on authentication mode."""
        auth_mode = self._config.auth_mode

        if auth_mode == AuthMode.TOKEN:
            return self._create_token_client()
        elif auth_mode == AuthMode.KUBECONFIG:
            return self._create_kubeconfig_client()
        else:  # AUTO
            return self._create_auto_client()

    def _create_token_client(self) -> client.ApiClient:
        """Create client using explicit token authentication."""
        if not self._config.api_server or not self._config.api_token:
            raise AuthenticationError(
                "api_server and api_token are required for token authentication"
            )

        configuration = client.Configuration()
        configuration.host = self._config.api_server
        configuration.api_key = {"authorization": f"Bearer {self._config.api_token}"}
        configuration.verify_ssl = True

        return client.ApiClient(configuration)

    def _create_kubeconfig_client(self) -> client.ApiClient:
        """Create client using kubeconfig file."""
        kubeconfig_path = self._config.effective_kubeconfig_path
        if not kubeconfig_path.exists():
            raise AuthenticationError(f"Kubeconfig not found: {kubeconfig_path}")

        return config.new_client_from_config(
            config_file=str(kubeconfig_path),
            context=self._config.kubeconfig_context,
        )

    def _create_auto_client(self) -> client.ApiClient:
        """Auto-detect authentication mode."""
        if SERVICE_ACCOUNT_TOKEN.exists():
            logger.info("Using in-cluster authentication")
            config.load_incluster_config()
            configuration = client.Configuration.get_default_copy()
            return client.ApiClient(configuration)

        kubeconfig_path = self._config.effective_kubeconfig_path
        if kubeconfig_path.exists():
            logger.info(f"Using kubeconfig: {kubeconfig_path}")
            return config.new_client_from_config(
                config_file=str(kubeconfig_path),
                context=self._config.kubeconfig_context,
            )

        raise AuthenticationError(
            "No valid authentication method found. "
            "Not running in-cluster and no kubeconfig available."
        )

    @property
    def api_client(self) -> client.ApiClient:
        """Get the low-level API client."""
        if not self._api_client:
            raise OpenShiftAIError("Client not connected. Call connect() first.")
        return self._api_client

    @property
    def dynamic(self) -> DynamicClient:
        """Get the dynamic client."""
        if not self._dynamic_client:
            raise OpenShiftAIError("Client not connected. Call connect() first.")
        return self._dynamic_client

    @property
    def core_v1(self) -> client.CoreV1Api:
        """Get the CoreV1 API client."""
        if not self._core_v1:
            raise OpenShiftAIError("Client not connected. Call connect() first.")
        return self._core_v1

    # Discovery

    def probe_group_version(self, group_version: str) -> bool:
        """Check whether the API server serves a group/version.

        Returns:
            True if served, False if the server answers 404.

        Raises:
            InternalError: For any other discovery failure.
        """
        try:
            self.api_client.call_api(
                f"/apis/{group_version}",
                "GET",
                auth_settings=["BearerToken"],
                response_type="object",
                _return_http_data_only=True,
            )
        except ApiException as e:
            if e.status == 404:
                return False
            raise InternalError(f"Failed to discover {group_version}", cause=e) from e
        except TRANSPORT_ERRORS as e:
            raise InternalError(f"Failed to discover {group_version}", cause=e) from e
        return True

    def get_resource(self, gvr: GroupVersionResource) -> Resource:
        """Get a dynamic resource for a GroupVersionResource.

        Uses caching to avoid repeated API discovery calls.
        """
        cache_key = str(gvr)
        if cache_key not in self._resource_cache:
            try:
                self._resource_cache[cache_key] = self.dynamic.resources.get(
                    api_version=gvr.api_version,
                    name=gvr.resource,
                )
            except ResourceNotFoundError as e:
                raise UnavailableError(str(gvr)) from e
            except ApiException as e:
                raise map_api_exception(e, "discover", gvr.resource) from e
            except TRANSPORT_ERRORS as e:
                raise InternalError(f"Failed to discover {gvr}", cause=e) from e
        return self._resource_cache[cache_key]

    # Generic resource access

    def list_items(
        self,
        gvr: GroupVersionResource,
        namespace: str | None = None,
        label_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        """List resources as plain dictionaries."""
        resource = self.get_resource(gvr)
        kwargs: dict[str, Any] = {}
        if namespace:
            kwargs["namespace"] = namespace
        if label_selector:
            kwargs["label_selector"] = label_selector
        try:
            result = resource.get(**kwargs)
        except ApiException as e:
            raise map_api_exception(e, "list", gvr.resource, namespace=namespace) from e
        except TRANSPORT_ERRORS as e:
            raise InternalError(f"Failed to list {gvr.resource}", cause=e) from e
        return list(result.to_dict().get("items") or [])

    def get_item(
        self,
        gvr: GroupVersionResource,
        name: str,
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Get a resource by name as a plain dictionary."""
        resource = self.get_resource(gvr)
        try:
            if namespace:
                result = resource.get(name=name, namespace=namespace)
            else:
                result = resource.get(name=name)
        except ApiException as e:
            raise map_api_exception(e, "get", gvr.resource, name, namespace) from e
        except TRANSPORT_ERRORS as e:
            raise InternalError(f"Failed to get {gvr.resource} '{name}'", cause=e) from e
        return result.to_dict()

    def create_item(
        self,
        gvr: GroupVersionResource,
        body: dict[str, Any],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Create a resource and return the stored object."""
        resource = self.get_resource(gvr)
        name = body.get("metadata", {}).get("name")
        try:
            if namespace:
                result = resource.create(body=body, namespace=namespace)
            else:
                result = resource.create(body=body)
        except ApiException as e:
            raise map_api_exception(e, "create", gvr.resource, name, namespace) from e
        except TRANSPORT_ERRORS as e:
            raise InternalError(f"Failed to create {gvr.resource} '{name}'", cause=e) from e
        return result.to_dict()

    def replace_item(
        self,
        gvr: GroupVersionResource,
        body: dict[str, Any],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Replace a resource and return the stored object."""
        resource = self.get_resource(gvr)
        name = body.get("metadata", {}).get("name")
        try:
            if namespace:
                result = resource.replace(body=body, namespace=namespace)
            else:
                result = resource.replace(body=body)
        except ApiException as e:
            raise map_api_exception(e, "update", gvr.resource, name, namespace) from e
        except TRANSPORT_ERRORS as e:
            raise InternalError(f"Failed to update {gvr.resource} '{name}'", cause=e) from e
        return result.to_dict()

    def delete_item(
        self,
        gvr: GroupVersionResource,
        name: str,
        namespace: str | None = None,
    ) -> None:
        """Delete a resource."""
        resource = self.get_resource(gvr)
        try:
            if namespace:
                resource.delete(name=name, namespace=namespace)
            else:
                resource.delete(name=name)
        except ApiException as e:
            raise map_api_exception(e, "delete", gvr.resource, name, namespace) from e
        except TRANSPORT_ERRORS as e:
            raise InternalError(f"Failed to delete {gvr.resource} '{name}'", cause=e) from e

    # Nodes

    def list_node_capacities(self) -> list[NodeCapacity]:
        """List every node with its reported capacity."""
        try:
            result = self.core_v1.list_node()
        except ApiException as e:
            raise map_api_exception(e, "list", "nodes") from e
        except TRANSPORT_ERRORS as e:
            raise InternalError("Failed to list nodes", cause=e) from e

        nodes = []
        for node in result.items:
            capacity = (node.status.capacity if node.status else None) or {}
            nodes.append(NodeCapacity(name=node.metadata.name, capacity=dict(capacity)))
        return nodes


@contextmanager
def get_k8s_client(
    config_obj: OpenShiftAIConfig | None = None,
) -> Generator[K8sClient, None, None]:
    """Context manager for K8s client with automatic cleanup."""
    k8s_client = K8sClient(config_obj)
    k8s_client.connect()
    try:
        yield k8s_client
    finally:
        k8s_client.disconnect()
