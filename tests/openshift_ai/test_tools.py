"""Tests for OpenShift AI MCP tools."""

from typing import Any
from unittest.mock import MagicMock

import pytest

from openshift_ai_mcp.config import OpenShiftAIConfig
from openshift_ai_mcp.openshift_ai.client import OpenShiftAIClient
from openshift_ai_mcp.openshift_ai.detection import CORE_GROUP, OpenShiftAIDetector
from openshift_ai_mcp.openshift_ai.tools import register_tools
from openshift_ai_mcp.utils.errors import NotFoundError, PermissionDeniedError


@pytest.fixture
def mock_mcp() -> MagicMock:
    """Create a mock FastMCP server that captures tool registrations."""
    mock = MagicMock()
    registered_tools: dict = {}

    def capture_tool():
        def decorator(f):
            registered_tools[f.__name__] = f
            return f

        return decorator

    mock.tool = capture_tool
    mock._registered_tools = registered_tools
    return mock


@pytest.fixture
def mock_k8s() -> MagicMock:
    """Create a mock K8sClient."""
    return MagicMock()


@pytest.fixture
def mock_server(mock_k8s: MagicMock) -> MagicMock:
    """Create a mock server wired to real detector and resource client."""
    server = MagicMock()
    server.config = OpenShiftAIConfig(enable_dangerous_operations=True)
    server.openshift_ai = OpenShiftAIClient(mock_k8s)
    server.detector = OpenShiftAIDetector(
        lambda gv: gv == f"{CORE_GROUP}/v1", lambda: []
    )
    return server


@pytest.fixture
def tools(mock_mcp: MagicMock, mock_server: MagicMock) -> dict[str, Any]:
    register_tools(mock_mcp, mock_server)
    return mock_mcp._registered_tools


class TestRegistration:
    """Tests for tool registration."""

    def test_tools_registered(self, tools: dict[str, Any]) -> None:
        assert set(tools) == {
            "get_openshift_ai_status",
            "list_openshift_ai_resources",
            "get_openshift_ai_resource",
            "create_openshift_ai_resource",
            "delete_openshift_ai_resource",
            "list_openshift_ai_namespaces",
        }


class TestStatusTool:
    """Tests for get_openshift_ai_status."""

    def test_degraded_but_available(self, tools: dict[str, Any]) -> None:
        result = tools["get_openshift_ai_status"]()

        assert result["available"] is True
        assert result["version"] == "v1"
        assert len(result["missingComponents"]) == 3
        assert result["policy"] == "core"
        assert "model" in result["resource_kinds"]


class TestReadTools:
    """Tests for list and get tools."""

    def test_list(
        self, tools: dict[str, Any], mock_k8s: MagicMock, model_item: dict[str, Any]
    ) -> None:
        mock_k8s.list_items.return_value = [model_item]

        result = tools["list_openshift_ai_resources"]("model", namespace="fraud-detection")

        assert result["count"] == 1
        assert result["items"][0] == {
            "name": "fraud-model",
            "namespace": "fraud-detection",
            "display_name": "Fraud Model",
            "phase": "Deployed",
            "ready": True,
        }

    def test_list_uses_default_namespace(
        self, tools: dict[str, Any], mock_server: MagicMock, mock_k8s: MagicMock
    ) -> None:
        mock_server.config = OpenShiftAIConfig(default_namespace="team-a")
        mock_k8s.list_items.return_value = []

        result = tools["list_openshift_ai_resources"]("experiment")

        assert result["namespace"] == "team-a"
        assert mock_k8s.list_items.call_args.kwargs["namespace"] == "team-a"

    def test_unknown_kind(self, tools: dict[str, Any]) -> None:
        result = tools["list_openshift_ai_resources"]("notebook")

        assert result["error_code"] == "NOT_FOUND"
        assert "notebook" in result["error"]

    def test_get(
        self, tools: dict[str, Any], mock_k8s: MagicMock, model_item: dict[str, Any]
    ) -> None:
        mock_k8s.get_item.return_value = model_item

        result = tools["get_openshift_ai_resource"]("model", "fraud-model", "fraud-detection")

        assert result["kind"] == "model"
        assert result["size"] == 1048576
        assert result["status"]["deployment_status"] == "Running"

    def test_get_not_found(self, tools: dict[str, Any], mock_k8s: MagicMock) -> None:
        mock_k8s.get_item.side_effect = NotFoundError("models", "missing", "ns")

        result = tools["get_openshift_ai_resource"]("model", "missing", "ns")

        assert result["error_code"] == "NOT_FOUND"


class TestCreateTool:
    """Tests for create_openshift_ai_resource."""

    def test_create_model(self, tools: dict[str, Any], mock_k8s: MagicMock) -> None:
        mock_k8s.create_item.side_effect = lambda gvr, body, namespace: body

        result = tools["create_openshift_ai_resource"](
            "model",
            "fraud-model",
            "ns",
            display_name="Fraud Model",
            labels={"team": "risk"},
            attributes={"model_type": "classification", "size": 10},
        )

        assert result["name"] == "fraud-model"
        body = mock_k8s.create_item.call_args.args[1]
        assert body["metadata"]["labels"] == {
            "team": "risk",
            "model.opendatahub.io/type": "classification",
        }
        assert body["metadata"]["annotations"]["model.opendatahub.io/size"] == "10"

    def test_read_only_mode(
        self, tools: dict[str, Any], mock_server: MagicMock, mock_k8s: MagicMock
    ) -> None:
        mock_server.config = OpenShiftAIConfig(read_only_mode=True)

        result = tools["create_openshift_ai_resource"]("experiment", "e", "ns")

        assert result == {"error": "Read-only mode is enabled"}
        mock_k8s.create_item.assert_not_called()

    def test_unsupported_attribute(self, tools: dict[str, Any], mock_k8s: MagicMock) -> None:
        result = tools["create_openshift_ai_resource"](
            "experiment", "e", "ns", attributes={"app_type": "x"}
        )

        assert result["error_code"] == "INVALID_ARGUMENT"
        assert "app_type" in result["error"]
        mock_k8s.create_item.assert_not_called()

    def test_invalid_field_value(self, tools: dict[str, Any], mock_k8s: MagicMock) -> None:
        result = tools["create_openshift_ai_resource"](
            "model", "m", "ns", attributes={"size": -1}
        )

        assert result["error_code"] == "INVALID_ARGUMENT"
        mock_k8s.create_item.assert_not_called()

    def test_permission_denied(self, tools: dict[str, Any], mock_k8s: MagicMock) -> None:
        mock_k8s.create_item.side_effect = PermissionDeniedError("create", "models 'm'")

        result = tools["create_openshift_ai_resource"]("model", "m", "ns")

        assert result["error_code"] == "PERMISSION_DENIED"


class TestDeleteTool:
    """Tests for delete_openshift_ai_resource."""

    def test_requires_confirm(self, tools: dict[str, Any], mock_k8s: MagicMock) -> None:
        result = tools["delete_openshift_ai_resource"]("model", "m", "ns")

        assert result["error"] == "Deletion not confirmed"
        mock_k8s.delete_item.assert_not_called()

    def test_dangerous_operations_disabled(
        self, tools: dict[str, Any], mock_server: MagicMock, mock_k8s: MagicMock
    ) -> None:
        mock_server.config = OpenShiftAIConfig()

        result = tools["delete_openshift_ai_resource"]("model", "m", "ns", confirm=True)

        assert result == {"error": "Dangerous operations are disabled"}
        mock_k8s.delete_item.assert_not_called()

    def test_delete(self, tools: dict[str, Any], mock_k8s: MagicMock) -> None:
        result = tools["delete_openshift_ai_resource"]("model", "m", "ns", confirm=True)

        assert result["deleted"] is True
        mock_k8s.delete_item.assert_called_once()


class TestNamespacesTool:
    """Tests for list_openshift_ai_namespaces."""

    def test_lists_project_namespaces(
        self, tools: dict[str, Any], mock_k8s: MagicMock, project_item: dict[str, Any]
    ) -> None:
        mock_k8s.list_items.return_value = [project_item]

        result = tools["list_openshift_ai_namespaces"]()

        assert result == {"namespaces": ["fraud-detection"], "count": 1}
