"""Generic client for OpenShift AI resources.

One ResourceClient serves every kind: the kind's ResourceDescriptor
supplies the GroupVersionResource and the decode/encode pair, and the
transport supplies plain dictionaries.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from openshift_ai_mcp.openshift_ai.codec import ResourceDescriptor, get_descriptor
from openshift_ai_mcp.openshift_ai.models import ResourceRecord
from openshift_ai_mcp.openshift_ai.resources import ResourceKind
from openshift_ai_mcp.utils.errors import ValidationError

if TYPE_CHECKING:
    from openshift_ai_mcp.clients.base import K8sClient

logger = logging.getLogger(__name__)


class ResourceClient:
    """CRUD operations for a single OpenShift AI resource kind.

    Every operation is a single transport call; failures propagate as
    OpenShiftAIError subclasses without retries.
    """

    def __init__(self, k8s: K8sClient, descriptor: ResourceDescriptor) -> None:
        self._k8s = k8s
        self._descriptor = descriptor

    @property
    def descriptor(self) -> ResourceDescriptor:
        return self._descriptor

    @property
    def kind(self) -> ResourceKind:
        return self._descriptor.kind

    def list(
        self,
        namespace: str | None = None,
        label_selector: str | None = None,
        phase: str | None = None,
    ) -> list[ResourceRecord]:
        """List resources, optionally in one namespace.

        Args:
            namespace: Namespace to list in; all namespaces when None.
            label_selector: Label selector passed to the API server.
            phase: Keep only records whose status phase matches.
        """
        items = self._k8s.list_items(
            self._descriptor.gvr, namespace=namespace, label_selector=label_selector
        )
        records = [self._descriptor.decode(item) for item in items]
        if phase:
            records = [r for r in records if r.status.phase == phase]
        logger.debug(f"Listed {len(records)} {self.kind.value} resources")
        return records

    def get(self, name: str, namespace: str) -> ResourceRecord:
        """Get a resource by name."""
        item = self._k8s.get_item(self._descriptor.gvr, name, namespace)
        return self._descriptor.decode(item)

    def create(self, record: ResourceRecord) -> ResourceRecord:
        """Create a resource from a record and return the stored state."""
        self._check_record(record)
        body = self._descriptor.encode(record)
        created = self._k8s.create_item(
            self._descriptor.gvr, body, namespace=record.namespace or None
        )
        logger.info(f"Created {self.kind.value} '{record.name}' in '{record.namespace}'")
        return self._descriptor.decode(created)

    def update(self, record: ResourceRecord) -> ResourceRecord:
        """Replace a resource with the encoded record and return the stored state."""
        self._check_record(record)
        body = self._descriptor.encode(record)
        updated = self._k8s.replace_item(
            self._descriptor.gvr, body, namespace=record.namespace or None
        )
        logger.info(f"Updated {self.kind.value} '{record.name}' in '{record.namespace}'")
        return self._descriptor.decode(updated)

    def delete(self, name: str, namespace: str) -> None:
        """Delete a resource by name."""
        self._k8s.delete_item(self._descriptor.gvr, name, namespace)
        logger.info(f"Deleted {self.kind.value} '{name}' in '{namespace}'")

    def _check_record(self, record: ResourceRecord) -> None:
        if type(record) is not self._descriptor.record_type:
            raise ValidationError(
                f"expected {self._descriptor.record_type.__name__}, "
                f"got {type(record).__name__}",
                kind=self.kind.value,
                name=record.name,
                namespace=record.namespace or None,
            )


class OpenShiftAIClient:
    """Entry point handing out per-kind ResourceClients."""

    def __init__(self, k8s: K8sClient) -> None:
        self._k8s = k8s
        self._clients: dict[ResourceKind, ResourceClient] = {}

    @property
    def k8s(self) -> K8sClient:
        return self._k8s

    def for_kind(self, kind: ResourceKind | str) -> ResourceClient:
        """Get the client for a kind.

        Raises:
            NotFoundError: If the kind is unknown.
        """
        descriptor = get_descriptor(kind)
        if descriptor.kind not in self._clients:
            self._clients[descriptor.kind] = ResourceClient(self._k8s, descriptor)
        return self._clients[descriptor.kind]

    def list_namespaces(self) -> list[str]:
        """List namespaces that hold Data Science Projects, sorted."""
        projects = self.for_kind(ResourceKind.PROJECT).list()
        return sorted({p.namespace for p in projects if p.namespace})
