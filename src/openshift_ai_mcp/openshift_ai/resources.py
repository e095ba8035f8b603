"""Resource kinds and their group/version/resource triples.

RESOURCE_TABLE is the only place group, version and plural strings for
OpenShift AI resources are spelled out. Supporting a new kind means adding
an enum member and one row here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from openshift_ai_mcp.utils.errors import NotFoundError


class ResourceKind(str, Enum):
    """Logical OpenShift AI resource names."""

    PROJECT = "project"
    APPLICATION = "application"
    EXPERIMENT = "experiment"
    MODEL = "model"
    PIPELINE = "pipeline"
    PIPELINE_RUN = "pipeline-run"


@dataclass(frozen=True)
class GroupVersionResource:
    """Group/version/resource triple identifying a served API resource type."""

    group: str
    version: str
    resource: str

    @property
    def group_version(self) -> str:
        """Get the group/version string used for discovery."""
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version

    @property
    def api_version(self) -> str:
        """Get the apiVersion value written into objects of this type."""
        return self.group_version

    def __str__(self) -> str:
        return f"{self.group_version}/{self.resource}"


RESOURCE_TABLE: Mapping[ResourceKind, GroupVersionResource] = MappingProxyType(
    {
        # Projects are backed by DataSciencePipelinesApplication objects
        ResourceKind.PROJECT: GroupVersionResource(
            group="datasciencepipelinesapplications.opendatahub.io",
            version="v1",
            resource="datasciencepipelinesapplications",
        ),
        ResourceKind.APPLICATION: GroupVersionResource(
            group="app.opendatahub.io",
            version="v1",
            resource="applications",
        ),
        ResourceKind.EXPERIMENT: GroupVersionResource(
            group="datasciencepipelines.opendatahub.io",
            version="v1",
            resource="experiments",
        ),
        ResourceKind.MODEL: GroupVersionResource(
            group="model.opendatahub.io",
            version="v1",
            resource="models",
        ),
        ResourceKind.PIPELINE: GroupVersionResource(
            group="datasciencepipelines.opendatahub.io",
            version="v1alpha1",
            resource="pipelines",
        ),
        ResourceKind.PIPELINE_RUN: GroupVersionResource(
            group="tekton.dev",
            version="v1beta1",
            resource="pipelineruns",
        ),
    }
)


def parse_kind(kind: ResourceKind | str) -> ResourceKind:
    """Coerce a kind name to ResourceKind.

    Raises:
        NotFoundError: If the name is not a known resource kind.
    """
    if isinstance(kind, ResourceKind):
        return kind
    try:
        return ResourceKind(kind)
    except ValueError:
        raise NotFoundError("resource kind", str(kind)) from None


def resolve(kind: ResourceKind | str) -> GroupVersionResource:
    """Resolve a logical resource kind to its GroupVersionResource.

    Repeated calls for the same kind return the same object.

    Raises:
        NotFoundError: If the kind has no entry in RESOURCE_TABLE.
    """
    resource_kind = parse_kind(kind)
    try:
        return RESOURCE_TABLE[resource_kind]
    except KeyError:
        raise NotFoundError("resource kind", resource_kind.value) from None


def known_kinds() -> list[str]:
    """List the kind names accepted by resolve()."""
    return [kind.value for kind in RESOURCE_TABLE]
