"""OpenShift AI detection and availability checking.

The detector asks the cluster's discovery endpoint which OpenShift AI API
groups are served. Probing policy is data: VersionProbeTable says which
versions are tried for a group and in what order, REQUIRED_COMPONENTS
lists the groups reported on, and an AvailabilityPolicy turns probe
results into the overall yes/no answer.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, Field

from openshift_ai_mcp.utils.errors import (
    OpenShiftAIError,
    OperationTimeoutError,
    UnavailableError,
)

if TYPE_CHECKING:
    from openshift_ai_mcp.clients.base import K8sClient

logger = logging.getLogger(__name__)

# The one group whose presence means OpenShift AI is installed
CORE_GROUP = "datascience.opendatahub.io"

# Groups reported on by check_availability, in report order
REQUIRED_COMPONENTS: Mapping[str, str] = MappingProxyType(
    {
        CORE_GROUP: "Data Science Projects",
        "kubeflow.org": "Jupyter Notebooks",
        "serving.kserve.io": "Model Serving",
        "tekton.dev": "AI Pipelines",
    }
)

# Expected maturity progression, most mature first
DEFAULT_VERSION_CANDIDATES: tuple[str, ...] = ("v1", "v1beta1", "v1alpha1")

# Node capacity keys advertised by GPU device plugins
GPU_RESOURCE_KEYS: tuple[str, ...] = ("nvidia.com/gpu", "amd.com/gpu", "intel.com/gpu")

GPU_COMPONENT = "GPU Monitoring"

DEFAULT_POLL_INTERVAL = 2.0

DiscoveryProbe = Callable[[str], bool]


@dataclass(frozen=True)
class NodeCapacity:
    """Name and reported capacity of one cluster node."""

    name: str
    capacity: Mapping[str, str] = field(default_factory=dict)


NodeLister = Callable[[], Sequence[NodeCapacity]]


@dataclass(frozen=True)
class VersionProbeTable:
    """Ordered version candidates per API group.

    Groups without an explicit entry use ``default``. The first candidate
    that the discovery endpoint serves wins.
    """

    default: tuple[str, ...] = DEFAULT_VERSION_CANDIDATES
    overrides: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def candidates(self, group: str) -> tuple[str, ...]:
        """Get the versions to try for a group, in order."""
        return tuple(self.overrides.get(group, self.default))


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of probing one API group."""

    group: str
    available: bool
    version: str = ""


class AvailabilityPolicy(Protocol):
    """Decides overall availability from per-group probe results."""

    name: str

    def evaluate(self, core: ProbeResult, components: Sequence[ProbeResult]) -> bool:
        """Return True when OpenShift AI should be reported as available."""
        ...


class CoreGroupPolicy:
    """Available whenever the core group is served.

    Missing optional groups degrade the report with warnings but never
    make the cluster unavailable.
    """

    name = "core"

    def evaluate(self, core: ProbeResult, components: Sequence[ProbeResult]) -> bool:  # noqa: ARG002
        return core.available


class AllComponentsPolicy:
    """Available only when the core group and every component group are served."""

    name = "all"

    def evaluate(self, core: ProbeResult, components: Sequence[ProbeResult]) -> bool:
        return core.available and all(result.available for result in components)


AVAILABILITY_POLICIES: Mapping[str, type[CoreGroupPolicy] | type[AllComponentsPolicy]] = (
    MappingProxyType({"core": CoreGroupPolicy, "all": AllComponentsPolicy})
)


def get_availability_policy(name: str) -> AvailabilityPolicy:
    """Look up an availability policy by name."""
    try:
        return AVAILABILITY_POLICIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown availability policy '{name}', expected one of: "
            f"{', '.join(AVAILABILITY_POLICIES)}"
        ) from None


class AvailabilityStatus(BaseModel):
    """Availability of OpenShift AI components in a cluster."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    available: bool = Field(..., description="Whether OpenShift AI is usable")
    version: str | None = Field(None, description="Served version of the core group")
    components: list[str] = Field(default_factory=list, description="Components found")
    missing_components: list[str] = Field(
        default_factory=list,
        alias="missingComponents",
        description="Component groups not served by the cluster",
    )
    warnings: list[str] = Field(default_factory=list, description="Degradation warnings")


class OpenShiftAIDetector:
    """Detects OpenShift AI API groups and GPU capacity in a cluster.

    The detector holds only the collaborators it is given and immutable
    tables, so separate instances can be used from separate threads.
    """

    def __init__(
        self,
        discovery: DiscoveryProbe,
        list_nodes: NodeLister,
        *,
        version_table: VersionProbeTable | None = None,
        components: Mapping[str, str] | None = None,
        core_group: str = CORE_GROUP,
        policy: AvailabilityPolicy | None = None,
        gpu_resource_keys: Sequence[str] = GPU_RESOURCE_KEYS,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self._discovery = discovery
        self._list_nodes = list_nodes
        self._version_table = version_table or VersionProbeTable()
        self._components = MappingProxyType(dict(components or REQUIRED_COMPONENTS))
        self._core_group = core_group
        self._policy = policy or CoreGroupPolicy()
        self._gpu_resource_keys = tuple(gpu_resource_keys)
        self._poll_interval = poll_interval
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_client(cls, k8s: K8sClient, **kwargs: object) -> OpenShiftAIDetector:
        """Create a detector backed by a connected K8sClient."""
        return cls(k8s.probe_group_version, k8s.list_node_capacities, **kwargs)  # type: ignore[arg-type]

    @property
    def policy(self) -> AvailabilityPolicy:
        """Get the availability policy in use."""
        return self._policy

    def probe_group(self, group: str) -> tuple[bool, str]:
        """Check whether a group is served and at which version.

        Versions are tried in table order and the first one served wins.

        Returns:
            Tuple of (available, version); version is "" when unavailable.
        """
        for version in self._version_table.candidates(group):
            group_version = f"{group}/{version}"
            try:
                served = self._discovery(group_version)
            except OpenShiftAIError as e:
                logger.debug(f"Discovery probe for {group_version} failed: {e}")
                served = False
            if served:
                logger.debug(f"Found OpenShift AI API group {group} at {version}")
                return True, version

        logger.debug(f"OpenShift AI API group not found: {group}")
        return False, ""

    def _probe(self, group: str) -> ProbeResult:
        available, version = self.probe_group(group)
        return ProbeResult(group=group, available=available, version=version)

    def check_availability(self) -> AvailabilityStatus:
        """Perform a full availability check of every component group.

        Each group lands in either ``components`` or ``missing_components``.
        Overall availability is decided by the policy. The core group result
        from the component loop is reused; it is probed on its own only when
        the components table does not list it.
        """
        components: list[str] = []
        missing: list[str] = []
        warnings: list[str] = []
        version: str | None = None
        results: list[ProbeResult] = []

        for group, component in self._components.items():
            result = self._probe(group)
            results.append(result)
            if result.available:
                components.append(f"{component} ({result.version})")
                if group == self._core_group:
                    version = result.version
            else:
                missing.append(f"{group} ({component})")

        if self.check_gpu_support():
            components.append(GPU_COMPONENT)

        core = next((r for r in results if r.group == self._core_group), None)
        if core is None:
            core = self._probe(self._core_group)
        if core.available and version is None:
            version = core.version
        available = self._policy.evaluate(core, results)

        if missing:
            warnings.append(
                f"Some OpenShift AI components are not available: {', '.join(missing)}"
            )

        if available:
            logger.info(f"OpenShift AI is available with components: {components}")
        else:
            logger.info("OpenShift AI is not available in this cluster")

        return AvailabilityStatus(
            available=available,
            version=version,
            components=components,
            missing_components=missing,
            warnings=warnings,
        )

    def check_gpu_support(self) -> bool:
        """Check whether any node advertises GPU capacity."""
        try:
            nodes = self._list_nodes()
        except OpenShiftAIError as e:
            logger.debug(f"Failed to list nodes for GPU detection: {e}")
            return False

        for node in nodes:
            for key in self._gpu_resource_keys:
                if key in node.capacity:
                    logger.debug(f"Found GPU indicator {key} on node {node.name}")
                    return True
        return False

    def is_openshift_ai_cluster(self) -> bool:
        """Quick check that probes the core group only."""
        available, _ = self.probe_group(self._core_group)
        return available

    def get_openshift_ai_version(self) -> str:
        """Get the served version of the core group.

        Raises:
            UnavailableError: If OpenShift AI is not installed.
        """
        available, version = self.probe_group(self._core_group)
        if not available:
            raise UnavailableError("OpenShift AI")
        return version

    def wait_for_availability(self, timeout: float) -> None:
        """Block until OpenShift AI is available or ``timeout`` seconds pass.

        The core group is probed on every tick of a constant poll interval.
        A tick that lands exactly on the deadline still probes, and a probe
        already in flight when the deadline passes is allowed to finish.

        Raises:
            OperationTimeoutError: If availability was never observed.
        """
        start = self._clock()
        deadline = start + timeout
        next_tick = start + self._poll_interval

        while True:
            now = self._clock()
            if next_tick > deadline or now > deadline:
                if deadline > now:
                    self._sleep(deadline - now)
                raise OperationTimeoutError("wait for OpenShift AI availability", timeout)

            if next_tick > now:
                self._sleep(next_tick - now)

            if self.is_openshift_ai_cluster():
                logger.info("OpenShift AI is now available")
                return

            next_tick += self._poll_interval
