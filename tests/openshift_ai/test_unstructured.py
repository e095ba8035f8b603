"""Tests for nested field access on generic items."""

from openshift_ai_mcp.openshift_ai.unstructured import (
    FieldLookup,
    nested_bool,
    nested_field,
    nested_int,
    nested_list,
    nested_map,
    nested_string,
    nested_string_map,
)

ITEM = {
    "metadata": {"name": "m", "labels": {"a": "1"}, "annotations": {"bad": 5}},
    "status": {
        "phase": "Running",
        "ready": True,
        "runCount": 3,
        "floatCount": 4.0,
        "fraction": 1.5,
        "message": None,
        "conditions": [{"type": "Ready"}],
    },
    "spec": "not-a-map",
}


class TestNestedField:
    """Tests for the three lookup outcomes."""

    def test_found(self) -> None:
        assert nested_field(ITEM, "status", "phase") == FieldLookup("Running", True, None)

    def test_absent(self) -> None:
        lookup = nested_field(ITEM, "status", "url")
        assert lookup == FieldLookup(None, False, None)
        assert not lookup.ok

    def test_explicit_none_is_absent(self) -> None:
        lookup = nested_field(ITEM, "status", "message")
        assert lookup.found is False
        assert lookup.error is None

    def test_non_map_intermediate_is_error(self) -> None:
        lookup = nested_field(ITEM, "spec", "appType")
        assert lookup.found is False
        assert ".spec accessor error" in lookup.error
        assert "expected map" in lookup.error

    def test_empty_path_returns_object(self) -> None:
        assert nested_field(ITEM).value is ITEM


class TestTypedReaders:
    """Tests for the typed readers."""

    def test_string(self) -> None:
        assert nested_string(ITEM, "status", "phase").value == "Running"
        wrong = nested_string(ITEM, "status", "ready")
        assert not wrong.ok
        assert "expected string" in wrong.error

    def test_bool(self) -> None:
        assert nested_bool(ITEM, "status", "ready").value is True
        assert not nested_bool(ITEM, "status", "runCount").ok

    def test_int_rejects_bool(self) -> None:
        lookup = nested_int(ITEM, "status", "ready")
        assert not lookup.ok
        assert "expected int64" in lookup.error

    def test_int_widens_integral_float(self) -> None:
        lookup = nested_int(ITEM, "status", "floatCount")
        assert lookup.value == 4
        assert isinstance(lookup.value, int)

    def test_int_rejects_fraction(self) -> None:
        assert not nested_int(ITEM, "status", "fraction").ok

    def test_int(self) -> None:
        assert nested_int(ITEM, "status", "runCount") == FieldLookup(3, True, None)

    def test_map_and_list(self) -> None:
        assert nested_map(ITEM, "metadata", "labels").value == {"a": "1"}
        assert nested_list(ITEM, "status", "conditions").value == [{"type": "Ready"}]
        assert not nested_list(ITEM, "status", "phase").ok

    def test_string_map(self) -> None:
        assert nested_string_map(ITEM, "metadata", "labels").value == {"a": "1"}
        bad = nested_string_map(ITEM, "metadata", "annotations")
        assert not bad.ok
        assert "non-string value" in bad.error

    def test_string_map_returns_copy(self) -> None:
        lookup = nested_string_map(ITEM, "metadata", "labels")
        lookup.value["b"] = "2"
        assert "b" not in ITEM["metadata"]["labels"]

    def test_missing_typed_field_is_absent(self) -> None:
        assert nested_string(ITEM, "status", "url") == FieldLookup(None, False, None)
