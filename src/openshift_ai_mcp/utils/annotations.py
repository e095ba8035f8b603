"""OpenShift AI annotation constants and helpers."""

from typing import Any


class OpenShiftAIAnnotations:
    """Annotation keys used by OpenShift AI resources."""

    # Dashboard annotations carrying the human-facing name and description
    DISPLAY_NAME = "openshift.io/display-name"
    DESCRIPTION = "openshift.io/description"

    # Model annotations
    MODEL_SIZE = "model.opendatahub.io/size"

    RESERVED = frozenset({DISPLAY_NAME, DESCRIPTION})

    @classmethod
    def get_display_name(cls, annotations: dict[str, Any] | None) -> str | None:
        """Get the display name, or None when the annotation is absent."""
        if not annotations:
            return None
        return annotations.get(cls.DISPLAY_NAME)

    @classmethod
    def get_description(cls, annotations: dict[str, Any] | None) -> str | None:
        """Get the description, or None when the annotation is absent."""
        if not annotations:
            return None
        return annotations.get(cls.DESCRIPTION)

    @classmethod
    def with_display_fields(
        cls,
        annotations: dict[str, str] | None,
        display_name: str | None,
        description: str | None,
    ) -> dict[str, str]:
        """Return a copy of annotations with the reserved keys re-derived.

        A field set to None removes its annotation so the returned map never
        disagrees with the record it was built from.
        """
        result = dict(annotations or {})
        for key, value in ((cls.DISPLAY_NAME, display_name), (cls.DESCRIPTION, description)):
            if value is None:
                result.pop(key, None)
            else:
                result[key] = value
        return result
