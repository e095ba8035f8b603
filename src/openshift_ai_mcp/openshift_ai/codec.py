"""Conversion between generic resource dictionaries and domain records.

Each resource kind has one ResourceDescriptor binding its kind, its fixed
``kind`` string, its record type and a decode/encode pair. Clients and
tools look descriptors up in DESCRIPTORS instead of carrying per-kind
call sequences.

Decoding is best-effort: a missing or wrongly typed status field is
skipped, and only an item whose metadata cannot be interpreted at all is
rejected. Encoding re-derives the display-name and description
annotations from the record and omits empty label/annotation maps.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from openshift_ai_mcp.openshift_ai.models import (
    Application,
    ApplicationStatus,
    DataScienceProject,
    Experiment,
    ExperimentStatus,
    Model,
    ModelStatus,
    Pipeline,
    PipelineRun,
    PipelineRunStatus,
    PipelineStatus,
    ProjectStatus,
    ResourceRecord,
    StatusCondition,
)
from openshift_ai_mcp.openshift_ai.resources import (
    GroupVersionResource,
    ResourceKind,
    parse_kind,
    resolve,
)
from openshift_ai_mcp.openshift_ai.unstructured import (
    FieldLookup,
    nested_bool,
    nested_int,
    nested_list,
    nested_map,
    nested_string,
    nested_string_map,
)
from openshift_ai_mcp.utils.annotations import OpenShiftAIAnnotations
from openshift_ai_mcp.utils.errors import NotFoundError, ValidationError
from openshift_ai_mcp.utils.labels import OpenShiftAILabels

logger = logging.getLogger(__name__)

GenericItem = Mapping[str, Any]


@dataclass(frozen=True)
class ResourceDescriptor:
    """Everything needed to move one resource kind across the wire."""

    kind: ResourceKind
    api_kind: str
    record_type: type[ResourceRecord]
    decode: Callable[[GenericItem], ResourceRecord]
    encode: Callable[[Any], dict[str, Any]]

    @property
    def gvr(self) -> GroupVersionResource:
        """Get the GroupVersionResource served for this kind."""
        return resolve(self.kind)


# -----------------------------------------------------------------------------
# Decode helpers
# -----------------------------------------------------------------------------


def _put(target: dict[str, Any], key: str, lookup: FieldLookup) -> None:
    """Copy a lookup result into target when a usable value was found."""
    if lookup.ok:
        target[key] = lookup.value
    elif lookup.error:
        logger.debug(f"Skipping {key}: {lookup.error}")


def _metadata_fields(item: GenericItem, kind: ResourceKind) -> dict[str, Any]:
    """Read name, namespace, labels, annotations and the display fields."""
    if not isinstance(item, Mapping):
        raise ValidationError(
            f"{kind.value} item must be an object, got {type(item).__name__}",
            kind=kind.value,
        )

    metadata = nested_map(item, "metadata")
    if metadata.error:
        raise ValidationError(metadata.error, field="metadata", kind=kind.value)
    if not metadata.found:
        raise ValidationError(f"{kind.value} item has no metadata", field="metadata", kind=kind.value)

    meta = metadata.value
    name = nested_string(meta, "name")
    namespace = nested_string(meta, "namespace")
    if not name.ok or not name.value:
        raise ValidationError(
            name.error or "metadata.name is required",
            field="metadata.name",
            kind=kind.value,
            namespace=namespace.value,
        )

    fields: dict[str, Any] = {"name": name.value, "namespace": namespace.value or ""}

    labels = nested_string_map(meta, "labels")
    annotations = nested_string_map(meta, "annotations")
    for lookup, what in ((labels, "labels"), (annotations, "annotations")):
        if lookup.error:
            logger.debug(f"Ignoring {what} of {kind.value} '{name.value}': {lookup.error}")

    annotation_map = annotations.value if annotations.ok else {}
    fields["labels"] = OpenShiftAILabels.without_reserved(labels.value if labels.ok else None)
    fields["annotations"] = annotation_map
    fields["display_name"] = OpenShiftAIAnnotations.get_display_name(annotation_map)
    fields["description"] = OpenShiftAIAnnotations.get_description(annotation_map)
    return fields


def _common_status(item: GenericItem) -> dict[str, Any]:
    status: dict[str, Any] = {}
    _put(status, "phase", nested_string(item, "status", "phase"))
    _put(status, "message", nested_string(item, "status", "message"))
    _put(status, "ready", nested_bool(item, "status", "ready"))
    return status


def _conditions(item: GenericItem) -> list[Mapping[str, Any]]:
    lookup = nested_list(item, "status", "conditions")
    if not lookup.ok:
        return []
    return [c for c in lookup.value if isinstance(c, Mapping)]


def _condition_is_true(item: GenericItem, condition_type: str) -> bool:
    return any(
        c.get("type") == condition_type and c.get("status") == "True"
        for c in _conditions(item)
    )


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _parse_size(value: str | None) -> int | None:
    """Parse a byte count annotation; anything but a plain integer is ignored."""
    if value is None:
        return None
    try:
        size = int(value.strip())
    except ValueError:
        logger.debug(f"Ignoring unparseable model size {value!r}")
        return None
    return size if size >= 0 else None


# -----------------------------------------------------------------------------
# Encode helpers
# -----------------------------------------------------------------------------


def _mirrored(
    target: dict[str, str], mirrored: Mapping[str, str | None] | None
) -> dict[str, str]:
    for key, value in (mirrored or {}).items():
        if value is None:
            target.pop(key, None)
        else:
            target[key] = value
    return target


def _build_object(
    kind: ResourceKind,
    api_kind: str,
    record: ResourceRecord,
    spec: dict[str, Any] | None = None,
    extra_labels: Mapping[str, str | None] | None = None,
    extra_annotations: Mapping[str, str | None] | None = None,
) -> dict[str, Any]:
    """Assemble the generic object shared by every kind.

    Mirrored keys in ``extra_labels`` and ``extra_annotations`` are
    re-derived from the record: a None value removes the key.
    """
    metadata: dict[str, Any] = {"name": record.name}
    if record.namespace:
        metadata["namespace"] = record.namespace

    labels = _mirrored(OpenShiftAILabels.without_reserved(record.labels), extra_labels)
    annotations = _mirrored(dict(record.annotations), extra_annotations)
    annotations = OpenShiftAIAnnotations.with_display_fields(
        annotations, record.display_name, record.description
    )

    if labels:
        metadata["labels"] = labels
    if annotations:
        metadata["annotations"] = annotations

    obj: dict[str, Any] = {
        "apiVersion": resolve(kind).api_version,
        "kind": api_kind,
        "metadata": metadata,
    }
    if spec is not None:
        obj["spec"] = spec
    return obj


def _present(**values: Any) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


# -----------------------------------------------------------------------------
# Projects
# -----------------------------------------------------------------------------


def decode_project(item: GenericItem) -> DataScienceProject:
    """Decode a DataSciencePipelinesApplication into a DataScienceProject."""
    fields = _metadata_fields(item, ResourceKind.PROJECT)
    status = _common_status(item)
    conditions = [
        StatusCondition(
            type=c["type"],
            status=c["status"],
            reason=_str_or_none(c.get("reason")),
            message=_str_or_none(c.get("message")),
            last_transition_time=_str_or_none(c.get("lastTransitionTime")),
        )
        for c in _conditions(item)
        if isinstance(c.get("type"), str) and isinstance(c.get("status"), str)
    ]
    if conditions:
        status["conditions"] = conditions
    return DataScienceProject(**fields, status=ProjectStatus(**status))


def _default_pipelines_spec() -> dict[str, Any]:
    return {
        "dspVersion": "v2",
        "objectStorage": {
            "disableHealthCheck": False,
            "enableExternalRoute": False,
        },
        "apiServer": {
            "deploy": True,
            "enableOauth": True,
        },
        "database": {
            "disableHealthCheck": False,
            "mariaDB": {
                "deploy": True,
                "pipelineDBName": "mlpipeline",
                "pvcSize": "10Gi",
                "username": "mlpipeline",
            },
        },
    }


def encode_project(record: ResourceRecord) -> dict[str, Any]:
    """Encode a DataScienceProject with default pipeline server settings."""
    return _build_object(
        ResourceKind.PROJECT,
        "DataSciencePipelinesApplication",
        record,
        spec=_default_pipelines_spec(),
    )


# -----------------------------------------------------------------------------
# Applications
# -----------------------------------------------------------------------------


def decode_application(item: GenericItem) -> Application:
    """Decode an Application."""
    fields = _metadata_fields(item, ResourceKind.APPLICATION)
    _put(fields, "app_type", nested_string(item, "spec", "appType"))
    status = _common_status(item)
    _put(status, "url", nested_string(item, "status", "url"))
    _put(status, "last_updated", nested_string(item, "status", "lastUpdated"))
    return Application(**fields, status=ApplicationStatus(**status))


def encode_application(record: Application) -> dict[str, Any]:
    """Encode an Application."""
    return _build_object(
        ResourceKind.APPLICATION,
        "Application",
        record,
        spec=_present(appType=record.app_type),
    )


# -----------------------------------------------------------------------------
# Experiments
# -----------------------------------------------------------------------------


def decode_experiment(item: GenericItem) -> Experiment:
    """Decode an Experiment."""
    fields = _metadata_fields(item, ResourceKind.EXPERIMENT)
    status = _common_status(item)
    _put(status, "run_count", nested_int(item, "status", "runCount"))
    _put(status, "last_updated", nested_string(item, "status", "lastUpdated"))
    return Experiment(**fields, status=ExperimentStatus(**status))


def encode_experiment(record: ResourceRecord) -> dict[str, Any]:
    """Encode an Experiment. Experiments carry no spec."""
    return _build_object(ResourceKind.EXPERIMENT, "Experiment", record)


# -----------------------------------------------------------------------------
# Models
# -----------------------------------------------------------------------------

# Model attribute -> (label key, spec key)
_MODEL_METADATA = {
    "model_type": (OpenShiftAILabels.MODEL_TYPE, "modelType"),
    "framework_version": (OpenShiftAILabels.MODEL_FRAMEWORK_VERSION, "frameworkVersion"),
    "format": (OpenShiftAILabels.MODEL_FORMAT, "format"),
    "version": (OpenShiftAILabels.MODEL_VERSION, "version"),
}


def decode_model(item: GenericItem) -> Model:
    """Decode a Model.

    Model metadata is read from the model.opendatahub.io labels, falling
    back to the matching spec field when a label is missing.
    """
    fields = _metadata_fields(item, ResourceKind.MODEL)
    labels = fields["labels"]
    for attr, (label_key, spec_key) in _MODEL_METADATA.items():
        if label_key in labels:
            fields[attr] = labels[label_key]
        else:
            _put(fields, attr, nested_string(item, "spec", spec_key))

    size = _parse_size(fields["annotations"].get(OpenShiftAIAnnotations.MODEL_SIZE))
    if size is not None:
        fields["size"] = size

    status = _common_status(item)
    _put(status, "deployment_status", nested_string(item, "status", "deploymentStatus"))
    return Model(**fields, status=ModelStatus(**status))


def encode_model(record: Model) -> dict[str, Any]:
    """Encode a Model, mirroring its metadata into spec and labels."""
    spec: dict[str, Any] = {}
    labels: dict[str, str | None] = {}
    for attr, (label_key, spec_key) in _MODEL_METADATA.items():
        value = getattr(record, attr)
        labels[label_key] = value
        if value is not None:
            spec[spec_key] = value

    size = str(record.size) if record.size is not None else None
    annotations = {OpenShiftAIAnnotations.MODEL_SIZE: size}

    return _build_object(
        ResourceKind.MODEL,
        "Model",
        record,
        spec=spec,
        extra_labels=labels,
        extra_annotations=annotations,
    )


# -----------------------------------------------------------------------------
# Pipelines and runs
# -----------------------------------------------------------------------------


def decode_pipeline(item: GenericItem) -> Pipeline:
    """Decode a Pipeline; readiness comes from its Ready condition."""
    fields = _metadata_fields(item, ResourceKind.PIPELINE)
    status: dict[str, Any] = {}
    _put(status, "phase", nested_string(item, "status", "phase"))
    _put(status, "message", nested_string(item, "status", "message"))
    status["ready"] = _condition_is_true(item, "Ready")
    _put(status, "run_count", nested_int(item, "status", "runCount"))
    _put(status, "last_updated", nested_string(item, "status", "lastUpdated"))
    return Pipeline(**fields, status=PipelineStatus(**status))


def encode_pipeline(record: ResourceRecord) -> dict[str, Any]:
    """Encode a Pipeline. Pipeline content is uploaded separately."""
    return _build_object(ResourceKind.PIPELINE, "Pipeline", record)


def decode_pipeline_run(item: GenericItem) -> PipelineRun:
    """Decode a PipelineRun; readiness comes from its Succeeded condition."""
    fields = _metadata_fields(item, ResourceKind.PIPELINE_RUN)
    pipeline_name = fields["labels"].get(OpenShiftAILabels.APP_KUBERNETES_PART_OF)
    if pipeline_name is not None:
        fields["pipeline_name"] = pipeline_name

    status: dict[str, Any] = {}
    _put(status, "phase", nested_string(item, "status", "phase"))
    _put(status, "message", nested_string(item, "status", "message"))
    status["ready"] = _condition_is_true(item, "Succeeded")
    _put(status, "started_at", nested_string(item, "status", "startTime"))
    _put(status, "finished_at", nested_string(item, "status", "completionTime"))
    _put(status, "last_updated", nested_string(item, "status", "lastUpdated"))
    return PipelineRun(**fields, status=PipelineRunStatus(**status))


def encode_pipeline_run(record: PipelineRun) -> dict[str, Any]:
    """Encode a PipelineRun referencing its pipeline."""
    spec: dict[str, Any] = {}
    labels: dict[str, str | None] = {
        OpenShiftAILabels.APP_KUBERNETES_PART_OF: record.pipeline_name or None
    }
    if record.pipeline_name:
        spec["pipelineRef"] = {"name": record.pipeline_name}
    return _build_object(
        ResourceKind.PIPELINE_RUN,
        "PipelineRun",
        record,
        spec=spec,
        extra_labels=labels,
    )


# -----------------------------------------------------------------------------
# Descriptor table
# -----------------------------------------------------------------------------

DESCRIPTORS: Mapping[ResourceKind, ResourceDescriptor] = {
    ResourceKind.PROJECT: ResourceDescriptor(
        ResourceKind.PROJECT,
        "DataSciencePipelinesApplication",
        DataScienceProject,
        decode_project,
        encode_project,
    ),
    ResourceKind.APPLICATION: ResourceDescriptor(
        ResourceKind.APPLICATION, "Application", Application, decode_application, encode_application
    ),
    ResourceKind.EXPERIMENT: ResourceDescriptor(
        ResourceKind.EXPERIMENT, "Experiment", Experiment, decode_experiment, encode_experiment
    ),
    ResourceKind.MODEL: ResourceDescriptor(
        ResourceKind.MODEL, "Model", Model, decode_model, encode_model
    ),
    ResourceKind.PIPELINE: ResourceDescriptor(
        ResourceKind.PIPELINE, "Pipeline", Pipeline, decode_pipeline, encode_pipeline
    ),
    ResourceKind.PIPELINE_RUN: ResourceDescriptor(
        ResourceKind.PIPELINE_RUN,
        "PipelineRun",
        PipelineRun,
        decode_pipeline_run,
        encode_pipeline_run,
    ),
}


def get_descriptor(kind: ResourceKind | str) -> ResourceDescriptor:
    """Get the descriptor for a kind.

    Raises:
        NotFoundError: If the kind is unknown.
    """
    resource_kind = parse_kind(kind)
    try:
        return DESCRIPTORS[resource_kind]
    except KeyError:
        raise NotFoundError("resource kind", resource_kind.value) from None


def descriptor_for(record: ResourceRecord) -> ResourceDescriptor:
    """Get the descriptor whose record type matches ``record`` exactly."""
    for descriptor in DESCRIPTORS.values():
        if type(record) is descriptor.record_type:
            return descriptor
    raise ValidationError(
        f"no resource kind for record type {type(record).__name__}",
        name=record.name,
        namespace=record.namespace or None,
    )


def decode(kind: ResourceKind | str, item: GenericItem) -> ResourceRecord:
    """Decode a generic item of the given kind."""
    return get_descriptor(kind).decode(item)


def encode(record: ResourceRecord) -> dict[str, Any]:
    """Encode a domain record into a generic item."""
    return descriptor_for(record).encode(record)
