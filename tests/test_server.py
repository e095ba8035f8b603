"""Tests for OpenShiftAIServer wiring."""

from unittest.mock import MagicMock

import pytest

from openshift_ai_mcp.config import AvailabilityPolicyName, OpenShiftAIConfig
from openshift_ai_mcp.server import OpenShiftAIServer


@pytest.fixture
def k8s() -> MagicMock:
    """Create a mock K8sClient whose cluster never serves OpenShift AI."""
    client = MagicMock()
    client.probe_group_version.return_value = False
    client.list_node_capacities.return_value = []
    return client


class TestOpenShiftAIServer:
    """Tests for server attach/detach and startup wait."""

    def test_not_running(self) -> None:
        server = OpenShiftAIServer(OpenShiftAIConfig())

        with pytest.raises(RuntimeError):
            _ = server.detector
        assert server.plugins == {}

    def test_attach_uses_configured_policy(self, k8s: MagicMock) -> None:
        server = OpenShiftAIServer(
            OpenShiftAIConfig(availability_policy=AvailabilityPolicyName.ALL)
        )

        server.attach(k8s)

        assert server.k8s is k8s
        assert server.detector.policy.name == "all"
        assert server.openshift_ai.k8s is k8s

    def test_detach(self, k8s: MagicMock) -> None:
        server = OpenShiftAIServer(OpenShiftAIConfig())
        server.attach(k8s)

        server.detach()

        with pytest.raises(RuntimeError):
            _ = server.openshift_ai

    def test_wait_timeout_is_not_fatal(self, k8s: MagicMock) -> None:
        server = OpenShiftAIServer(OpenShiftAIConfig(availability_timeout=0))
        server.attach(k8s)

        server._wait_for_openshift_ai()

        k8s.probe_group_version.assert_not_called()

    def test_create_mcp_loads_core_plugin(self) -> None:
        server = OpenShiftAIServer(OpenShiftAIConfig())

        server.create_mcp()

        assert set(server.plugins) == {"openshift-ai"}
