"""MCP Tools for OpenShift AI resources and availability."""

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError as PydanticValidationError

from openshift_ai_mcp.openshift_ai.codec import get_descriptor
from openshift_ai_mcp.openshift_ai.resources import known_kinds
from openshift_ai_mcp.utils.errors import OpenShiftAIError, ValidationError, error_response

if TYPE_CHECKING:
    from openshift_ai_mcp.server import OpenShiftAIServer


# Record fields that are set from dedicated tool arguments
_COMMON_FIELDS = frozenset(
    {"name", "namespace", "display_name", "description", "labels", "annotations", "status"}
)


def _kind_attributes(kind: str) -> list[str]:
    record_type = get_descriptor(kind).record_type
    return [f for f in record_type.model_fields if f not in _COMMON_FIELDS]


def register_tools(mcp: FastMCP, server: "OpenShiftAIServer") -> None:
    """Register OpenShift AI tools with the MCP server."""

    @mcp.tool()
    def get_openshift_ai_status() -> dict[str, Any]:
        """Check whether OpenShift AI is installed and which components are served.

        Probes the cluster's API discovery endpoint for the Data Science
        Projects, Jupyter Notebooks, Model Serving and AI Pipelines API
        groups, and checks nodes for GPU capacity.

        Returns:
            Availability, core version, found and missing components, and warnings.
        """
        try:
            status = server.detector.check_availability()
        except OpenShiftAIError as e:
            return error_response(e)

        result = status.model_dump(by_alias=True)
        result["policy"] = server.detector.policy.name
        result["resource_kinds"] = known_kinds()
        return result

    @mcp.tool()
    def list_openshift_ai_resources(
        kind: str,
        namespace: str | None = None,
        phase: str | None = None,
    ) -> dict[str, Any]:
        """List OpenShift AI resources of one kind.

        Args:
            kind: Resource kind: project, application, experiment, model,
                pipeline, or pipeline-run.
            namespace: Namespace to list in (default: configured namespace, or all).
            phase: Only return resources in this status phase (e.g. Running).

        Returns:
            Resource summaries and their count.
        """
        namespace = namespace or server.config.default_namespace
        try:
            records = server.openshift_ai.for_kind(kind).list(namespace=namespace, phase=phase)
        except OpenShiftAIError as e:
            return error_response(e)

        return {
            "kind": kind,
            "namespace": namespace,
            "items": [r.summary() for r in records],
            "count": len(records),
        }

    @mcp.tool()
    def get_openshift_ai_resource(kind: str, name: str, namespace: str) -> dict[str, Any]:
        """Get detailed information about one OpenShift AI resource.

        Args:
            kind: Resource kind (see list_openshift_ai_resources).
            name: Resource name.
            namespace: Namespace containing the resource.

        Returns:
            The full resource record including status.
        """
        try:
            record = server.openshift_ai.for_kind(kind).get(name, namespace)
        except OpenShiftAIError as e:
            return error_response(e)

        result = record.model_dump()
        result["kind"] = kind
        return result

    @mcp.tool()
    def create_openshift_ai_resource(
        kind: str,
        name: str,
        namespace: str,
        display_name: str | None = None,
        description: str | None = None,
        labels: dict[str, str] | None = None,
        attributes: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create an OpenShift AI resource.

        Kind-specific fields go in ``attributes``: app_type for applications;
        model_type, framework_version, format, version and size for models;
        pipeline_name for pipeline runs. Projects are created with a default
        pipeline server configuration.

        Args:
            kind: Resource kind (see list_openshift_ai_resources).
            name: Resource name (must be DNS-compatible).
            namespace: Namespace to create the resource in.
            display_name: Human-readable display name.
            description: Free-form description.
            labels: Extra labels to set on the resource.
            attributes: Kind-specific fields.

        Returns:
            The created resource record.
        """
        allowed, reason = server.config.is_operation_allowed("create")
        if not allowed:
            return {"error": reason}

        attributes = attributes or {}
        try:
            descriptor = get_descriptor(kind)
            invalid = sorted(set(attributes) - set(_kind_attributes(kind)))
            if invalid:
                raise ValidationError(
                    f"unsupported attributes for {kind}: {', '.join(invalid)}",
                    field="attributes",
                    supported=_kind_attributes(kind),
                )
            try:
                record = descriptor.record_type(
                    name=name,
                    namespace=namespace,
                    display_name=display_name,
                    description=description,
                    labels=labels or {},
                    **attributes,
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e), kind=kind, name=name, namespace=namespace) from e

            created = server.openshift_ai.for_kind(kind).create(record)
        except OpenShiftAIError as e:
            return error_response(e)

        return {
            "kind": kind,
            "name": created.name,
            "namespace": created.namespace,
            "status": created.status.phase,
            "message": f"{kind} '{name}' created",
        }

    @mcp.tool()
    def delete_openshift_ai_resource(
        kind: str,
        name: str,
        namespace: str,
        confirm: bool = False,
    ) -> dict[str, Any]:
        """Delete an OpenShift AI resource.

        Args:
            kind: Resource kind (see list_openshift_ai_resources).
            name: Resource name.
            namespace: Namespace containing the resource.
            confirm: Must be True to actually delete.

        Returns:
            Confirmation of deletion.
        """
        allowed, reason = server.config.is_operation_allowed("delete")
        if not allowed:
            return {"error": reason}

        if not confirm:
            return {
                "error": "Deletion not confirmed",
                "message": f"To delete {kind} '{name}', set confirm=True.",
            }

        try:
            server.openshift_ai.for_kind(kind).delete(name, namespace)
        except OpenShiftAIError as e:
            return error_response(e)

        return {
            "kind": kind,
            "name": name,
            "namespace": namespace,
            "deleted": True,
            "message": f"{kind} '{name}' deleted",
        }

    @mcp.tool()
    def list_openshift_ai_namespaces() -> dict[str, Any]:
        """List namespaces that contain Data Science Projects.

        Returns:
            Sorted namespace names.
        """
        try:
            namespaces = server.openshift_ai.list_namespaces()
        except OpenShiftAIError as e:
            return error_response(e)
        return {"namespaces": namespaces, "count": len(namespaces)}
