"""Path-based access to generic resource dictionaries.

Items returned by the dynamic client are plain nested dicts. These helpers
read a value at a fixed path and report one of three outcomes:

- found: ``FieldLookup(value, True, None)``
- absent: ``FieldLookup(None, False, None)``
- present but unusable: ``FieldLookup(None, False, "<reason>")``

A ``None`` stored at the path is reported as absent rather than as a value,
and the caller decides whether an error is fatal.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NamedTuple


class FieldLookup(NamedTuple):
    """Result of reading one nested field."""

    value: Any
    found: bool
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when a usable value was found."""
        return self.found and self.error is None


_MISSING = FieldLookup(None, False, None)


def _path(fields: tuple[str, ...]) -> str:
    return "." + ".".join(fields)


def nested_field(obj: Mapping[str, Any], *fields: str) -> FieldLookup:
    """Read the raw value at ``fields`` without any type check."""
    current: Any = obj
    for i, name in enumerate(fields):
        if not isinstance(current, Mapping):
            return FieldLookup(
                None,
                False,
                f"{_path(fields[:i])} accessor error: {current!r} is of type "
                f"{type(current).__name__}, expected map",
            )
        if name not in current or current[name] is None:
            return _MISSING
        current = current[name]
    return FieldLookup(current, True, None)


def _typed(obj: Mapping[str, Any], fields: tuple[str, ...], kind: type, label: str) -> FieldLookup:
    lookup = nested_field(obj, *fields)
    if not lookup.found:
        return lookup
    value = lookup.value
    # bool is an int subclass; keep the two apart
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        return FieldLookup(
            None,
            False,
            f"{_path(fields)} accessor error: {value!r} is of type "
            f"{type(value).__name__}, expected {label}",
        )
    return lookup


def nested_string(obj: Mapping[str, Any], *fields: str) -> FieldLookup:
    """Read a string field."""
    return _typed(obj, fields, str, "string")


def nested_bool(obj: Mapping[str, Any], *fields: str) -> FieldLookup:
    """Read a boolean field."""
    return _typed(obj, fields, bool, "bool")


def nested_int(obj: Mapping[str, Any], *fields: str) -> FieldLookup:
    """Read an integer field, widened to a Python int.

    Integral floats (as produced by some JSON encoders) are accepted;
    booleans and fractional numbers are not.
    """
    lookup = nested_field(obj, *fields)
    if not lookup.found:
        return lookup
    value = lookup.value
    if isinstance(value, int) and not isinstance(value, bool):
        return FieldLookup(int(value), True, None)
    if isinstance(value, float) and value.is_integer():
        return FieldLookup(int(value), True, None)
    return FieldLookup(
        None,
        False,
        f"{_path(fields)} accessor error: {value!r} is of type "
        f"{type(value).__name__}, expected int64",
    )


def nested_map(obj: Mapping[str, Any], *fields: str) -> FieldLookup:
    """Read a mapping field."""
    return _typed(obj, fields, Mapping, "map")


def nested_list(obj: Mapping[str, Any], *fields: str) -> FieldLookup:
    """Read a list field."""
    return _typed(obj, fields, list, "list")


def nested_string_map(obj: Mapping[str, Any], *fields: str) -> FieldLookup:
    """Read a mapping whose values must all be strings."""
    lookup = nested_map(obj, *fields)
    if not lookup.ok:
        return lookup
    for key, value in lookup.value.items():
        if not isinstance(value, str):
            return FieldLookup(
                None,
                False,
                f"{_path(fields)} accessor error: contains non-string value "
                f"in the map under key {key!r}: {value!r}",
            )
    return FieldLookup(dict(lookup.value), True, None)
