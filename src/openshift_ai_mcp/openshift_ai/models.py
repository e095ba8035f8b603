"""Pydantic models for OpenShift AI domain records.

Records are built per call from generic resource dictionaries and are
never cached; the cluster owns the only persistent copy of a resource.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResourceStatus(BaseModel):
    """Status fields shared by every resource kind."""

    phase: str = Field("Unknown", description="Lifecycle phase reported by the controller")
    message: str | None = Field(None, description="Human-readable status message")
    ready: bool = Field(False, description="Whether the resource is ready")


class StatusCondition(BaseModel):
    """A single status condition."""

    type: str = Field(..., description="Condition type (e.g. Ready)")
    status: str = Field(..., description="True, False or Unknown")
    reason: str | None = Field(None, description="Machine-readable reason")
    message: str | None = Field(None, description="Human-readable details")
    last_transition_time: str | None = Field(None, description="Last transition timestamp")


class ResourceRecord(BaseModel):
    """Fields shared by every OpenShift AI domain record.

    ``display_name`` and ``description`` live on the wire only as the
    ``openshift.io/display-name`` and ``openshift.io/description``
    annotations. ``None`` means the annotation is absent.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Resource name")
    namespace: str = Field("", description="Namespace containing the resource")
    display_name: str | None = Field(None, description="Human-readable display name")
    description: str | None = Field(None, description="Free-form description")
    labels: dict[str, str] = Field(default_factory=dict, description="Resource labels")
    annotations: dict[str, str] = Field(
        default_factory=dict, description="Resource annotations"
    )
    status: ResourceStatus = Field(default_factory=ResourceStatus)

    def summary(self) -> dict[str, Any]:
        """Compact representation for tool responses."""
        return {
            "name": self.name,
            "namespace": self.namespace,
            "display_name": self.display_name,
            "phase": self.status.phase,
            "ready": self.status.ready,
        }


class ProjectStatus(ResourceStatus):
    """Status of a Data Science Project."""

    conditions: list[StatusCondition] | None = Field(None, description="Status conditions")


class DataScienceProject(ResourceRecord):
    """Data Science Project, backed by a DataSciencePipelinesApplication."""

    status: ProjectStatus = Field(default_factory=ProjectStatus)


class ApplicationStatus(ResourceStatus):
    """Status of an Application."""

    url: str | None = Field(None, description="URL the application is served at")
    last_updated: str | None = Field(None, description="Last update timestamp")


class Application(ResourceRecord):
    """Application deployed through the OpenShift AI dashboard."""

    app_type: str | None = Field(None, description="Application type")
    status: ApplicationStatus = Field(default_factory=ApplicationStatus)


class ExperimentStatus(ResourceStatus):
    """Status of an Experiment."""

    run_count: int | None = Field(None, description="Number of runs in the experiment")
    last_updated: str | None = Field(None, description="Last update timestamp")


class Experiment(ResourceRecord):
    """Pipeline experiment grouping related runs."""

    status: ExperimentStatus = Field(default_factory=ExperimentStatus)


class ModelStatus(ResourceStatus):
    """Status of a Model."""

    deployment_status: str | None = Field(None, description="Deployment status")


class Model(ResourceRecord):
    """Model tracked by the OpenShift AI model controller."""

    model_type: str | None = Field(None, description="Model type (e.g. classification)")
    framework_version: str | None = Field(None, description="Framework version")
    format: str | None = Field(None, description="Model format (e.g. onnx)")
    version: str | None = Field(None, description="Model version")
    size: int | None = Field(None, ge=0, description="Model size in bytes")
    status: ModelStatus = Field(default_factory=ModelStatus)

    # "model_" prefixed fields clash with pydantic's protected namespace
    model_config = ConfigDict(extra="forbid", protected_namespaces=())


class PipelineStatus(ResourceStatus):
    """Status of a Pipeline."""

    run_count: int | None = Field(None, description="Number of runs of the pipeline")
    last_updated: str | None = Field(None, description="Last update timestamp")


class Pipeline(ResourceRecord):
    """Data Science Pipeline definition."""

    status: PipelineStatus = Field(default_factory=PipelineStatus)


class PipelineRunStatus(ResourceStatus):
    """Status of a PipelineRun."""

    started_at: str | None = Field(None, description="Start timestamp")
    finished_at: str | None = Field(None, description="Completion timestamp")
    last_updated: str | None = Field(None, description="Last update timestamp")


class PipelineRun(ResourceRecord):
    """Single execution of a pipeline."""

    pipeline_name: str | None = Field(None, description="Pipeline this run belongs to")
    status: PipelineRunStatus = Field(default_factory=PipelineRunStatus)
