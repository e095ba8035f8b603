"""Utility functions and helpers for the OpenShift AI MCP server."""

from openshift_ai_mcp.utils.annotations import OpenShiftAIAnnotations
from openshift_ai_mcp.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    InternalError,
    NotFoundError,
    OpenShiftAIError,
    OperationNotAllowedError,
    OperationTimeoutError,
    PermissionDeniedError,
    ResourceExistsError,
    UnavailableError,
    ValidationError,
    error_response,
)
from openshift_ai_mcp.utils.labels import OpenShiftAILabels

__all__ = [
    # Errors
    "OpenShiftAIError",
    "NotFoundError",
    "ResourceExistsError",
    "ValidationError",
    "PermissionDeniedError",
    "UnavailableError",
    "OperationTimeoutError",
    "InternalError",
    "AuthenticationError",
    "ConfigurationError",
    "OperationNotAllowedError",
    "error_response",
    # Labels and annotations
    "OpenShiftAIAnnotations",
    "OpenShiftAILabels",
]
