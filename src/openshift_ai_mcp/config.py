"""Configuration management for the OpenShift AI MCP server."""

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthMode(str, Enum):
    """Authentication mode for Kubernetes API."""

    AUTO = "auto"
    KUBECONFIG = "kubeconfig"
    TOKEN = "token"


class TransportMode(str, Enum):
    """MCP transport mode."""

    STDIO = "stdio"
    SSE = "sse"
    STREAMABLE_HTTP = "streamable-http"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class AvailabilityPolicyName(str, Enum):
    """Rule deciding when OpenShift AI counts as available."""

    CORE = "core"
    ALL = "all"


SERVICE_ACCOUNT_TOKEN = Path("/var/run/secrets/kubernetes.io/serviceaccount/token")


class OpenShiftAIConfig(BaseSettings):
    """Configuration for the OpenShift AI MCP server.

    Configuration is loaded from environment variables with the
    OPENSHIFT_AI_MCP_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENSHIFT_AI_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Authentication settings
    auth_mode: AuthMode = Field(
        default=AuthMode.AUTO,
        description="Authentication mode: auto, kubeconfig, or token",
    )
    kubeconfig_path: Path | None = Field(
        default=None,
        description="Path to kubeconfig file (defaults to ~/.kube/config)",
    )
    kubeconfig_context: str | None = Field(
        default=None,
        description="Kubeconfig context to use",
    )
    api_server: str | None = Field(
        default=None,
        description="Kubernetes API server URL (for token auth)",
    )
    api_token: str | None = Field(
        default=None,
        description="Kubernetes API token (for token auth)",
    )

    # Namespace settings
    default_namespace: str | None = Field(
        default=None,
        description="Default namespace for operations",
    )

    # Transport settings
    transport: TransportMode = Field(
        default=TransportMode.STDIO,
        description="MCP transport mode: stdio, sse, or streamable-http",
    )
    host: str = Field(
        default="127.0.0.1",
        description="Host to bind HTTP server to",
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port to bind HTTP server to",
    )

    # Safety settings
    enable_dangerous_operations: bool = Field(
        default=False,
        description="Enable dangerous operations like delete",
    )
    read_only_mode: bool = Field(
        default=False,
        description="Disable all write operations",
    )

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )

    # Detection settings
    availability_policy: AvailabilityPolicyName = Field(
        default=AvailabilityPolicyName.CORE,
        description="Availability rule: core (core group only) or all (every component)",
    )
    availability_poll_interval: float = Field(
        default=2.0,
        gt=0,
        le=60,
        description="Seconds between availability probes while waiting",
    )
    wait_for_availability: bool = Field(
        default=False,
        description="Block startup until OpenShift AI is available",
    )
    availability_timeout: float = Field(
        default=300.0,
        ge=0,
        description="Seconds to wait for OpenShift AI at startup",
    )

    @field_validator("kubeconfig_path", mode="before")
    @classmethod
    def resolve_kubeconfig_path(cls, v: str | Path | None) -> Path | None:
        """Resolve kubeconfig path, defaulting to standard location."""
        if v is None:
            return None
        return Path(v).expanduser().resolve()

    @property
    def effective_kubeconfig_path(self) -> Path:
        """Get the effective kubeconfig path, with default."""
        if self.kubeconfig_path:
            return self.kubeconfig_path
        env_path = os.environ.get("KUBECONFIG")
        if env_path:
            return Path(env_path).expanduser().resolve()
        return Path.home() / ".kube" / "config"

    def validate_auth_config(self) -> list[str]:
        """Validate authentication configuration and return any warnings."""
        warnings = []

        if self.auth_mode == AuthMode.TOKEN:
            if not self.api_server:
                raise ValueError("api_server is required when auth_mode is 'token'")
            if not self.api_token:
                raise ValueError("api_token is required when auth_mode is 'token'")

        if self.auth_mode == AuthMode.KUBECONFIG and not self.effective_kubeconfig_path.exists():
            raise ValueError(f"Kubeconfig file not found: {self.effective_kubeconfig_path}")

        if self.auth_mode == AuthMode.AUTO:
            if SERVICE_ACCOUNT_TOKEN.exists():
                warnings.append("Running in-cluster, will use service account")
            elif not self.effective_kubeconfig_path.exists():
                warnings.append(
                    f"No kubeconfig found at {self.effective_kubeconfig_path}, "
                    "will attempt in-cluster auth"
                )

        return warnings

    def is_operation_allowed(self, operation: str) -> tuple[bool, str | None]:
        """Check if an operation is allowed based on safety settings.

        Returns:
            Tuple of (allowed, reason_if_not_allowed)
        """
        if self.read_only_mode and operation in ("create", "update", "delete", "patch"):
            return False, "Read-only mode is enabled"

        if not self.enable_dangerous_operations and operation == "delete":
            return False, "Dangerous operations are disabled"

        return True, None


# Global configuration instance
_config: OpenShiftAIConfig | None = None


def get_config() -> OpenShiftAIConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = OpenShiftAIConfig()
    return _config


def configure(**kwargs: Any) -> OpenShiftAIConfig:
    """Configure the global settings.

    This should be called before get_config() if you want to override defaults.
    """
    global _config
    _config = OpenShiftAIConfig(**kwargs)
    return _config
