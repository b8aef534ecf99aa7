#!/usr/bin/env python3
"""
Purpose:
    Default-fill engine: normalizes raw input against a node tree by applying
    declared defaults bottom-up, immediately before a document is written.

    Only default, optional, array, object, document and record nodes transform
    their input; every other kind passes it through unchanged. Input of the
    wrong shape (e.g. a string given to an array node) is returned as-is,
    since enforcing shape is the job of the store's validator.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Callable, Dict, Final, Mapping

from docschema.core.schema.node_kind import NodeKind
from docschema.core.utils import is_plain_mapping, is_sequence

if TYPE_CHECKING:
    from docschema.core.schema.nodes import SchemaNode


# --- Absent sentinel --- #

class _MissingType:
    """Type of `MISSING`; a falsy singleton distinct from `None` (stored null)."""

    _instance: "_MissingType | None" = None

    def __new__(cls) -> "_MissingType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_MissingType":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "_MissingType":
        return self

    def __reduce__(self) -> str:
        return "MISSING"


# Marks an absent value: a key not present in the input mapping, or a fill with no input.
MISSING: Final = _MissingType()


# --- Public API --- #

def fill(node: "SchemaNode", value: Any = MISSING) -> Any:
    """
    Return `value` normalized against `node`.

    Never mutates `value`; containers that are transformed are rebuilt.
    Exceptions raised by default producers propagate unmodified.
    Literal defaults are deep-copied, so no two fills share a default container.

    Example:
        >>> import docschema as ds
        >>> ds.document({"role": ds.enum("admin", "user").default("user")}).fill({"extra": 1})
        {'extra': 1, 'role': 'user'}
    """
    return _FILLERS[node.kind](node, value)


def resolve_default(default_value: Any) -> Any:
    """Call a producer (zero-arg callable) or return a deep copy of the literal default."""
    if callable(default_value):
        return default_value()
    return copy.deepcopy(default_value)


# --- Per-kind fillers --- #

def _identity(node: "SchemaNode", value: Any) -> Any:
    return value


def _fill_default(node: "SchemaNode", value: Any) -> Any:
    if value is MISSING:
        value = resolve_default(node.default_value)
    return fill(node.type, value)


def _fill_optional(node: "SchemaNode", value: Any) -> Any:
    if value is MISSING:
        return MISSING
    return fill(node.type, value)


def _fill_array(node: "SchemaNode", value: Any) -> Any:
    if not is_sequence(value):
        return value
    return [fill(node.items, item) for item in value]


def _fill_props(props: Mapping[str, "SchemaNode"], value: Any) -> Any:
    if not is_plain_mapping(value):
        return value
    out = dict(value)
    for key, child in props.items():
        filled = fill(child, value.get(key, MISSING))
        if filled is not MISSING:
            out[key] = filled
    return out


def _fill_object(node: "SchemaNode", value: Any) -> Any:
    return _fill_props(node.props, value)


def _fill_record(node: "SchemaNode", value: Any) -> Any:
    if not is_plain_mapping(value):
        return value
    if node.key.kind == NodeKind.ENUM:
        # Enum keys are a closed, declared set: fill them like object properties.
        return _fill_props({k: node.value for k in node.key.key_names()}, value)
    out = {}
    for key, item in value.items():
        filled = fill(node.value, item)
        if filled is not MISSING:
            out[key] = filled
    return out


_FILLERS: Dict[NodeKind, Callable[["SchemaNode", Any], Any]] = {
    NodeKind.NULL: _identity,
    NodeKind.BOOL: _identity,
    NodeKind.DATE: _identity,
    NodeKind.BINARY: _identity,
    NodeKind.OBJECT_ID: _identity,
    NodeKind.REF: _identity,
    NodeKind.ENUM: _identity,
    NodeKind.STRING: _identity,
    NodeKind.NUMBER: _identity,
    NodeKind.ARRAY: _fill_array,
    NodeKind.OBJECT: _fill_object,
    NodeKind.DOCUMENT: _fill_object,
    NodeKind.RECORD: _fill_record,
    NodeKind.OPTIONAL: _fill_optional,
    NodeKind.DEFAULT: _fill_default,
    NodeKind.UNION: _identity,
    NodeKind.INTERSECTION: _identity,
}


# --- Runtime guard --- #
def _validate_fillers():
    missing = [k.value for k in NodeKind if k not in _FILLERS]
    if missing:
        raise RuntimeError(f"No fill rule for node kind(s): {missing}")

_validate_fillers()
