"""Tests for resource kind resolution."""

import pytest

from openshift_ai_mcp.openshift_ai.resources import (
    RESOURCE_TABLE,
    GroupVersionResource,
    ResourceKind,
    known_kinds,
    parse_kind,
    resolve,
)
from openshift_ai_mcp.utils.errors import NotFoundError


class TestResolve:
    """Tests for resolve()."""

    def test_model_scenario(self) -> None:
        """Model resolves to model.opendatahub.io/v1 models."""
        gvr = resolve(ResourceKind.MODEL)
        assert gvr == GroupVersionResource("model.opendatahub.io", "v1", "models")

    @pytest.mark.parametrize(
        ("kind", "group", "version", "resource"),
        [
            (
                "project",
                "datasciencepipelinesapplications.opendatahub.io",
                "v1",
                "datasciencepipelinesapplications",
            ),
            ("application", "app.opendatahub.io", "v1", "applications"),
            ("experiment", "datasciencepipelines.opendatahub.io", "v1", "experiments"),
            ("pipeline", "datasciencepipelines.opendatahub.io", "v1alpha1", "pipelines"),
            ("pipeline-run", "tekton.dev", "v1beta1", "pipelineruns"),
        ],
    )
    def test_table_rows(self, kind: str, group: str, version: str, resource: str) -> None:
        """Every kind resolves to its table row."""
        gvr = resolve(kind)
        assert (gvr.group, gvr.version, gvr.resource) == (group, version, resource)

    def test_repeated_calls_return_identical_value(self) -> None:
        """resolve is referentially stable."""
        assert resolve("model") is resolve(ResourceKind.MODEL)
        assert resolve("model") == resolve("model")

    def test_unknown_kind_raises_not_found(self) -> None:
        """Unknown kinds raise NotFoundError naming the kind."""
        with pytest.raises(NotFoundError) as exc_info:
            resolve("notebook")
        assert exc_info.value.error_code == "NOT_FOUND"
        assert exc_info.value.details["name"] == "notebook"

    def test_every_kind_has_a_row(self) -> None:
        """The table covers the whole enum."""
        assert set(RESOURCE_TABLE) == set(ResourceKind)
        assert known_kinds() == [k.value for k in ResourceKind]


class TestGroupVersionResource:
    """Tests for GroupVersionResource helpers."""

    def test_api_version(self) -> None:
        gvr = GroupVersionResource("tekton.dev", "v1beta1", "pipelineruns")
        assert gvr.api_version == "tekton.dev/v1beta1"
        assert gvr.group_version == "tekton.dev/v1beta1"
        assert str(gvr) == "tekton.dev/v1beta1/pipelineruns"

    def test_core_group_has_bare_version(self) -> None:
        gvr = GroupVersionResource("", "v1", "nodes")
        assert gvr.api_version == "v1"

    def test_is_frozen(self) -> None:
        gvr = resolve("model")
        with pytest.raises(AttributeError):
            gvr.version = "v2"  # type: ignore[misc]


class TestParseKind:
    """Tests for parse_kind()."""

    def test_accepts_enum_and_string(self) -> None:
        assert parse_kind(ResourceKind.PIPELINE_RUN) is ResourceKind.PIPELINE_RUN
        assert parse_kind("pipeline-run") is ResourceKind.PIPELINE_RUN

    def test_rejects_unknown(self) -> None:
        with pytest.raises(NotFoundError):
            parse_kind("PipelineRun")
