"""Shared fixtures for OpenShift AI MCP tests."""

from typing import Any

import pytest


@pytest.fixture
def model_item() -> dict[str, Any]:
    """A Model as returned by the dynamic client."""
    return {
        "apiVersion": "model.opendatahub.io/v1",
        "kind": "Model",
        "metadata": {
            "name": "fraud-model",
            "namespace": "fraud-detection",
            "labels": {
                "model.opendatahub.io/type": "classification",
                "model.opendatahub.io/format": "onnx",
                "team": "risk",
            },
            "annotations": {
                "openshift.io/display-name": "Fraud Model",
                "openshift.io/description": "Detects card fraud",
                "model.opendatahub.io/size": "1048576",
            },
        },
        "spec": {
            "modelType": "ignored-because-label-wins",
            "frameworkVersion": "1.15",
            "version": "3",
        },
        "status": {
            "phase": "Deployed",
            "message": "Serving",
            "ready": True,
            "deploymentStatus": "Running",
        },
    }


@pytest.fixture
def project_item() -> dict[str, Any]:
    """A DataSciencePipelinesApplication backing a Data Science Project."""
    return {
        "apiVersion": "datasciencepipelinesapplications.opendatahub.io/v1",
        "kind": "DataSciencePipelinesApplication",
        "metadata": {
            "name": "dspa",
            "namespace": "fraud-detection",
            "annotations": {"openshift.io/display-name": "Fraud Detection"},
        },
        "spec": {"dspVersion": "v2"},
        "status": {
            "phase": "Ready",
            "conditions": [
                {
                    "type": "Ready",
                    "status": "True",
                    "reason": "MinimumReplicasAvailable",
                    "lastTransitionTime": "2024-05-01T10:00:00Z",
                },
                {"type": "APIServerReady", "status": "True"},
            ],
        },
    }


@pytest.fixture
def pipeline_run_item() -> dict[str, Any]:
    """A Tekton PipelineRun that belongs to a pipeline."""
    return {
        "apiVersion": "tekton.dev/v1beta1",
        "kind": "PipelineRun",
        "metadata": {
            "name": "train-run-1",
            "namespace": "fraud-detection",
            "labels": {"app.kubernetes.io/part-of": "train"},
        },
        "spec": {"pipelineRef": {"name": "train"}},
        "status": {
            "phase": "Succeeded",
            "startTime": "2024-05-01T10:00:00Z",
            "completionTime": "2024-05-01T10:30:00Z",
            "conditions": [{"type": "Succeeded", "status": "True"}],
        },
    }


@pytest.fixture
def experiment_item() -> dict[str, Any]:
    """An Experiment with a run count."""
    return {
        "apiVersion": "datasciencepipelines.opendatahub.io/v1",
        "kind": "Experiment",
        "metadata": {"name": "baseline", "namespace": "fraud-detection"},
        "status": {"phase": "Active", "runCount": 12, "lastUpdated": "2024-05-02T08:00:00Z"},
    }
