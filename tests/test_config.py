"""Tests for server configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from openshift_ai_mcp.config import (
    AuthMode,
    AvailabilityPolicyName,
    OpenShiftAIConfig,
    configure,
    get_config,
)


class TestDefaults:
    """Tests for default values and environment loading."""

    def test_defaults(self) -> None:
        config = OpenShiftAIConfig()

        assert config.auth_mode == AuthMode.AUTO
        assert config.read_only_mode is False
        assert config.enable_dangerous_operations is False
        assert config.availability_policy == AvailabilityPolicyName.CORE
        assert config.availability_poll_interval == 2.0
        assert config.wait_for_availability is False

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENSHIFT_AI_MCP_AVAILABILITY_POLICY", "all")
        monkeypatch.setenv("OPENSHIFT_AI_MCP_DEFAULT_NAMESPACE", "team-a")

        config = OpenShiftAIConfig()

        assert config.availability_policy == AvailabilityPolicyName.ALL
        assert config.default_namespace == "team-a"

    @pytest.mark.parametrize("interval", [0, -1, 61])
    def test_poll_interval_bounds(self, interval: float) -> None:
        with pytest.raises(PydanticValidationError):
            OpenShiftAIConfig(availability_poll_interval=interval)

    def test_kubeconfig_path_expanded(self) -> None:
        config = OpenShiftAIConfig(kubeconfig_path="~/kube.yaml")
        assert config.effective_kubeconfig_path == (Path.home() / "kube.yaml").resolve()

    def test_configure_replaces_global(self) -> None:
        config = configure(default_namespace="configured")
        assert get_config() is config


class TestOperationSafety:
    """Tests for is_operation_allowed."""

    def test_read_only_blocks_writes(self) -> None:
        config = OpenShiftAIConfig(read_only_mode=True, enable_dangerous_operations=True)

        assert config.is_operation_allowed("create") == (False, "Read-only mode is enabled")
        assert config.is_operation_allowed("delete")[0] is False
        assert config.is_operation_allowed("list") == (True, None)

    def test_delete_needs_dangerous_operations(self) -> None:
        assert OpenShiftAIConfig().is_operation_allowed("delete") == (
            False,
            "Dangerous operations are disabled",
        )
        assert OpenShiftAIConfig(enable_dangerous_operations=True).is_operation_allowed(
            "delete"
        ) == (True, None)


class TestAuthValidation:
    """Tests for validate_auth_config."""

    def test_token_mode_requires_server(self) -> None:
        config = OpenShiftAIConfig(auth_mode=AuthMode.TOKEN, api_token="t")
        with pytest.raises(ValueError, match="api_server"):
            config.validate_auth_config()

    def test_token_mode_requires_token(self) -> None:
        config = OpenShiftAIConfig(auth_mode=AuthMode.TOKEN, api_server="https://api:6443")
        with pytest.raises(ValueError, match="api_token"):
            config.validate_auth_config()

    def test_token_mode_valid(self) -> None:
        config = OpenShiftAIConfig(
            auth_mode=AuthMode.TOKEN, api_server="https://api:6443", api_token="t"
        )
        assert config.validate_auth_config() == []

    def test_missing_kubeconfig(self, tmp_path: Path) -> None:
        config = OpenShiftAIConfig(
            auth_mode=AuthMode.KUBECONFIG, kubeconfig_path=tmp_path / "missing"
        )
        with pytest.raises(ValueError, match="Kubeconfig file not found"):
            config.validate_auth_config()
