#!/usr/bin/env python3
"""
Purpose:
    Artifact derivation: turns a node tree into the validation document a
    store's native `$jsonSchema` validator consumes. Pure and deterministic;
    each call builds fresh containers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict

from docschema.core import constants as C
from docschema.core.schema.node_kind import NodeKind
from docschema.core.utils import pattern_source

if TYPE_CHECKING:
    from docschema.core.schema.nodes import SchemaNode


# --- Public API --- #

def bson_schema(node: "SchemaNode") -> Dict[str, Any]:
    """
    Derive the validation document for `node`.

    Example:
        >>> import docschema as ds
        >>> ds.array(ds.int_()).min(1).bson_schema()
        {'bsonType': 'array', 'minItems': 1, 'items': {'bsonType': 'int'}}
    """
    return _DERIVERS[node.kind](node)


# --- Per-kind derivers --- #

def _tagged(tag: str) -> Callable[["SchemaNode"], Dict[str, Any]]:
    def derive(node: "SchemaNode") -> Dict[str, Any]:
        return {"bsonType": tag, **node.options.artifact_fields()}
    return derive


def _derive_ref(node: "SchemaNode") -> Dict[str, Any]:
    return {"bsonType": C.BSON_OBJECT_ID, **node.options.artifact_fields(exclude={"delete_policy"})}


def _derive_enum(node: "SchemaNode") -> Dict[str, Any]:
    return {"enum": list(node.present_values()), **node.options.artifact_fields()}


def _derive_string(node: "SchemaNode") -> Dict[str, Any]:
    out = {"bsonType": C.BSON_STRING, **node.options.artifact_fields(exclude={"pattern"})}
    if node.options.pattern:
        out["pattern"] = pattern_source(node.options.pattern)
    return out


def _derive_number(node: "SchemaNode") -> Dict[str, Any]:
    tag = node.options.type or C.BSON_NUMBER
    return {"bsonType": tag, **node.options.artifact_fields(exclude={"type"})}


def _derive_array(node: "SchemaNode") -> Dict[str, Any]:
    return {
        "bsonType": C.BSON_ARRAY,
        **node.options.artifact_fields(),
        "items": bson_schema(node.items),
    }


def _derive_object(node: "SchemaNode") -> Dict[str, Any]:
    out = {"bsonType": C.BSON_OBJECT, **node.options.artifact_fields(exclude={"indexes"})}
    required = node.required_keys()
    # The store rejects an empty `required` list.
    if required:
        out["required"] = required
    out["properties"] = {name: bson_schema(child) for name, child in node.props.items()}
    return out


def _derive_record(node: "SchemaNode") -> Dict[str, Any]:
    out = {"bsonType": C.BSON_OBJECT, **node.options.artifact_fields()}

    if node.key.kind == NodeKind.ENUM:
        keys = node.key.key_names()
        if keys and node.value.required():
            out["required"] = keys
        out["properties"] = {k: bson_schema(node.value) for k in keys}
        return out

    pattern = node.key.options.pattern
    source = pattern_source(pattern) if pattern else C.MATCH_ALL_PATTERN
    out["patternProperties"] = {source: bson_schema(node.value)}
    return out


def _derive_inner(node: "SchemaNode") -> Dict[str, Any]:
    return bson_schema(node.type)


def _derive_union(node: "SchemaNode") -> Dict[str, Any]:
    keyword = "oneOf" if node.options.exclusive else "anyOf"
    return {
        **node.options.artifact_fields(exclude={"exclusive"}),
        keyword: [bson_schema(t) for t in node.types],
    }


def _derive_intersection(node: "SchemaNode") -> Dict[str, Any]:
    return {
        **node.options.artifact_fields(),
        "allOf": [bson_schema(t) for t in node.types],
    }


_DERIVERS: Dict[NodeKind, Callable[["SchemaNode"], Dict[str, Any]]] = {
    NodeKind.NULL: _tagged(C.BSON_NULL),
    NodeKind.BOOL: _tagged(C.BSON_BOOL),
    NodeKind.DATE: _tagged(C.BSON_DATE),
    NodeKind.BINARY: _tagged(C.BSON_BINARY),
    NodeKind.OBJECT_ID: _tagged(C.BSON_OBJECT_ID),
    NodeKind.REF: _derive_ref,
    NodeKind.ENUM: _derive_enum,
    NodeKind.STRING: _derive_string,
    NodeKind.NUMBER: _derive_number,
    NodeKind.ARRAY: _derive_array,
    NodeKind.OBJECT: _derive_object,
    NodeKind.DOCUMENT: _derive_object,
    NodeKind.RECORD: _derive_record,
    NodeKind.OPTIONAL: _derive_inner,
    NodeKind.DEFAULT: _derive_inner,
    NodeKind.UNION: _derive_union,
    NodeKind.INTERSECTION: _derive_intersection,
}


# --- Runtime guard --- #
def _validate_derivers():
    missing = [k.value for k in NodeKind if k not in _DERIVERS]
    if missing:
        raise RuntimeError(f"No derivation rule for node kind(s): {missing}")

_validate_derivers()
