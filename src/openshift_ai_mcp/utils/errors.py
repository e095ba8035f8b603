"""Custom exceptions and error handling for the OpenShift AI MCP server.

Every exception raised by the core derives from OpenShiftAIError and
carries a stable error code, so tool handlers can turn failures into
structured responses without matching on message text.
"""

from __future__ import annotations

from typing import Any


class OpenShiftAIError(Exception):
    """Base exception for OpenShift AI operations."""

    error_code = "INTERNAL"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


def _location(namespace: str | None) -> str:
    return f" in namespace '{namespace}'" if namespace else ""


class NotFoundError(OpenShiftAIError):
    """Resource kind unknown, or remote object absent."""

    error_code = "NOT_FOUND"

    def __init__(self, resource_type: str, name: str, namespace: str | None = None) -> None:
        super().__init__(
            f"{resource_type} '{name}' not found{_location(namespace)}",
            {"resource_type": resource_type, "name": name, "namespace": namespace},
        )


class ResourceExistsError(OpenShiftAIError):
    """Resource already exists."""

    error_code = "ALREADY_EXISTS"

    def __init__(self, resource_type: str, name: str, namespace: str | None = None) -> None:
        super().__init__(
            f"{resource_type} '{name}' already exists{_location(namespace)}",
            {"resource_type": resource_type, "name": name, "namespace": namespace},
        )


class ValidationError(OpenShiftAIError):
    """Malformed input or a missing required field."""

    error_code = "INVALID_ARGUMENT"

    def __init__(self, message: str, field: str | None = None, **context: Any) -> None:
        details: dict[str, Any] = {"field": field} if field else {}
        details.update({k: v for k, v in context.items() if v is not None})
        super().__init__(f"invalid argument: {message}", details)


class PermissionDeniedError(OpenShiftAIError):
    """The transport refused the request for lack of permissions."""

    error_code = "PERMISSION_DENIED"

    def __init__(self, action: str, resource: str) -> None:
        super().__init__(
            f"permission denied for {action} on {resource}",
            {"action": action, "resource": resource},
        )


class UnavailableError(OpenShiftAIError):
    """A required capability is absent from the cluster."""

    error_code = "UNAVAILABLE"

    def __init__(self, service: str) -> None:
        super().__init__(f"service '{service}' is unavailable", {"service": service})


class OperationTimeoutError(OpenShiftAIError):
    """A bounded wait expired before its condition was observed."""

    error_code = "TIMEOUT"

    def __init__(self, operation: str, timeout: float | None = None) -> None:
        details = {"timeout_seconds": timeout} if timeout is not None else {}
        super().__init__(f"operation '{operation}' timed out", details)


class InternalError(OpenShiftAIError):
    """Wraps an underlying transport failure.

    The original exception is kept on ``cause``; callers should also raise
    with ``from cause`` so the traceback chain is preserved.
    """

    error_code = "INTERNAL"

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, details)
        self.cause = cause


class AuthenticationError(OpenShiftAIError):
    """Authentication with the Kubernetes API failed."""

    error_code = "AUTH_FAILED"

    def __init__(self, message: str = "Failed to authenticate with Kubernetes API") -> None:
        super().__init__(message)


class ConfigurationError(OpenShiftAIError):
    """Configuration error."""

    error_code = "CONFIGURATION"

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, details)


class OperationNotAllowedError(OpenShiftAIError):
    """Operation not allowed due to safety settings."""

    error_code = "OPERATION_DISABLED"

    def __init__(self, operation: str, reason: str | None = None) -> None:
        message = f"Operation '{operation}' is not allowed"
        if reason:
            message += f": {reason}"
        super().__init__(message, {"operation": operation, "reason": reason})


def error_response(error: OpenShiftAIError) -> dict[str, Any]:
    """Convert an exception into a tool response dictionary."""
    response: dict[str, Any] = {
        "error": error.message,
        "error_code": error.error_code,
    }
    if error.details:
        response["details"] = error.details
    return response
