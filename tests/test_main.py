"""Tests for command line handling."""

from openshift_ai_mcp.__main__ import _has_auth_error, build_config, parse_args
from openshift_ai_mcp.config import AvailabilityPolicyName, TransportMode
from openshift_ai_mcp.utils.errors import AuthenticationError


class TestBuildConfig:
    """Tests for turning CLI arguments into configuration."""

    def test_no_arguments(self) -> None:
        config = build_config(parse_args([]))

        assert config.transport == TransportMode.STDIO
        assert config.wait_for_availability is False

    def test_flags(self) -> None:
        config = build_config(
            parse_args(
                [
                    "--transport",
                    "sse",
                    "--port",
                    "9000",
                    "--read-only",
                    "--availability-policy",
                    "all",
                ]
            )
        )

        assert config.transport == TransportMode.SSE
        assert config.port == 9000
        assert config.read_only_mode is True
        assert config.availability_policy == AvailabilityPolicyName.ALL

    def test_wait_enables_startup_wait(self) -> None:
        config = build_config(parse_args(["--wait", "30"]))

        assert config.wait_for_availability is True
        assert config.availability_timeout == 30.0


class TestHasAuthError:
    """Tests for _has_auth_error."""

    def test_direct(self) -> None:
        assert _has_auth_error(AuthenticationError()) is True

    def test_nested_group(self) -> None:
        class Group(Exception):
            def __init__(self, *exceptions: BaseException) -> None:
                super().__init__("group")
                self.exceptions = exceptions

        group = Group(ValueError("x"), Group(AuthenticationError()))
        assert _has_auth_error(group) is True

    def test_unrelated(self) -> None:
        assert _has_auth_error(RuntimeError("boom")) is False
