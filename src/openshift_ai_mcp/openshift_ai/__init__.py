"""OpenShift AI capability detection, resource resolution and record codecs."""

from openshift_ai_mcp.openshift_ai.client import OpenShiftAIClient, ResourceClient
from openshift_ai_mcp.openshift_ai.codec import (
    DESCRIPTORS,
    ResourceDescriptor,
    decode,
    encode,
    get_descriptor,
)
from openshift_ai_mcp.openshift_ai.detection import (
    AllComponentsPolicy,
    AvailabilityStatus,
    CoreGroupPolicy,
    NodeCapacity,
    OpenShiftAIDetector,
    VersionProbeTable,
    get_availability_policy,
)
from openshift_ai_mcp.openshift_ai.resources import (
    RESOURCE_TABLE,
    GroupVersionResource,
    ResourceKind,
    resolve,
)

__all__ = [
    # Resolver
    "RESOURCE_TABLE",
    "GroupVersionResource",
    "ResourceKind",
    "resolve",
    # Codec
    "DESCRIPTORS",
    "ResourceDescriptor",
    "decode",
    "encode",
    "get_descriptor",
    # Detection
    "AllComponentsPolicy",
    "AvailabilityStatus",
    "CoreGroupPolicy",
    "NodeCapacity",
    "OpenShiftAIDetector",
    "VersionProbeTable",
    "get_availability_policy",
    # Clients
    "OpenShiftAIClient",
    "ResourceClient",
]
