#!/usr/bin/env python3
"""
Purpose:
    Defines the NodeKind enumeration tagging every schema node variant, the
    DeletePolicy enumeration carried by reference nodes, and the NumberType
    subtypes of number nodes.
"""

from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    """
    Closed set of schema node variants.

    - null, bool, date, binary, objectId : primitive BSON scalars
    - ref          : objectId pointing at another collection
    - enum         : fixed set of literal values
    - string       : textual scalar (length / pattern constraints)
    - number       : numeric scalar (int, long, decimal or double)
    - array        : homogeneous sequence of one item node
    - object       : mapping with named child nodes
    - document     : top-level collection schema (object + indexes)
    - record       : open mapping keyed by a string or enum node
    - optional     : wrapper making the inner node not required
    - default      : wrapper filling a default when input is absent
    - union        : anyOf / oneOf over member nodes
    - intersection : allOf over member nodes
    """

    NULL = "null"
    BOOL = "bool"
    DATE = "date"
    BINARY = "binary"
    OBJECT_ID = "objectId"
    REF = "ref"
    ENUM = "enum"
    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"
    OBJECT = "object"
    DOCUMENT = "document"
    RECORD = "record"
    OPTIONAL = "optional"
    DEFAULT = "default"
    UNION = "union"
    INTERSECTION = "intersection"


class DeletePolicy(str, Enum):
    """
    Behaviour an external cascade mechanism applies to a referencing document
    when the referenced document is removed.

    - bypass  : do nothing
    - reject  : refuse the delete while references exist
    - cascade : delete the referencing documents too
    - nullify : set the reference to null
    - unset   : remove the reference field
    """

    BYPASS = "bypass"
    REJECT = "reject"
    CASCADE = "cascade"
    NULLIFY = "nullify"
    UNSET = "unset"

    @classmethod
    def parse(cls, value: str | DeletePolicy) -> DeletePolicy:
        """Coerce a policy name (trimmed, case-insensitive) to a `DeletePolicy`."""
        if isinstance(value, DeletePolicy):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown delete policy {value!r}; expected one of: {allowed}") from None


class NumberType(str, Enum):
    """Numeric BSON subtypes; the chosen subtype becomes the emitted `bsonType`."""

    INT = "int"
    LONG = "long"
    DECIMAL = "decimal"
    DOUBLE = "double"
