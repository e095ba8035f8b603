"""OpenShift AI label constants and helpers."""

from typing import Any

from openshift_ai_mcp.utils.annotations import OpenShiftAIAnnotations


class OpenShiftAILabels:
    """Label keys used by OpenShift AI resources."""

    # Model metadata labels
    MODEL_TYPE = "model.opendatahub.io/type"
    MODEL_FRAMEWORK_VERSION = "model.opendatahub.io/framework-version"
    MODEL_FORMAT = "model.opendatahub.io/format"
    MODEL_VERSION = "model.opendatahub.io/version"

    # Pipeline runs point back at their pipeline through part-of
    APP_KUBERNETES_PART_OF = "app.kubernetes.io/part-of"

    @classmethod
    def without_reserved(cls, labels: dict[str, Any] | None) -> dict[str, str]:
        """Copy labels, dropping keys reserved for annotations."""
        if not labels:
            return {}
        return {
            k: v for k, v in labels.items() if k not in OpenShiftAIAnnotations.RESERVED
        }

    @classmethod
    def filter_selector(cls, **labels: str) -> str:
        """Create a label selector string from key-value pairs."""
        return ",".join(f"{k}={v}" for k, v in labels.items())
