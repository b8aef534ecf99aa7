#!/usr/bin/env python3
"""
Purpose:
    Public construction surface: one factory per node kind, plus shortcuts
    for numeric subtypes. Names that clash with Python builtins carry a
    trailing underscore (`bool_`, `int_`, `object_`).

Example:
    >>> import docschema as ds
    >>> users = ds.document({
    ...     "name": ds.string().pattern(r"^[a-z]+$"),
    ...     "role": ds.enum("admin", "user").default("user"),
    ...     "team": ds.ref("teams").delete("nullify").optional(),
    ... })
"""

from __future__ import annotations

from typing import Any, Mapping, Union

from docschema.core.schema.nodes import (
    SchemaNode,
    NullNode,
    BoolNode,
    DateNode,
    BinaryNode,
    ObjectIdNode,
    RefNode,
    EnumNode,
    StringNode,
    NumberNode,
    ArrayNode,
    ObjectNode,
    DocumentNode,
    RecordNode,
    OptionalNode,
    DefaultNode,
    UnionNode,
    IntersectionNode,
)


# --- Primitives --- #

def null() -> NullNode:
    return NullNode()


def bool_() -> BoolNode:
    return BoolNode()


def date() -> DateNode:
    return DateNode()


def binary() -> BinaryNode:
    return BinaryNode()


def object_id() -> ObjectIdNode:
    return ObjectIdNode()


def ref(target: str) -> RefNode:
    """ObjectId referencing a document of the collection named `target`."""
    return RefNode(ref=target)


def enum(*values: Any) -> EnumNode:
    """Node accepting exactly one of `values`; include `MISSING` to allow absence."""
    return EnumNode(values=values)


def string() -> StringNode:
    return StringNode()


def number() -> NumberNode:
    return NumberNode()


def int_() -> NumberNode:
    return NumberNode().int_()


def long() -> NumberNode:
    return NumberNode().long()


def decimal() -> NumberNode:
    return NumberNode().decimal()


def double() -> NumberNode:
    return NumberNode().double()


# --- Composites --- #

def array(items: SchemaNode) -> ArrayNode:
    return ArrayNode(items=items)


def object_(props: Mapping[str, SchemaNode]) -> ObjectNode:
    return ObjectNode(props=dict(props))


def document(props: Mapping[str, SchemaNode]) -> DocumentNode:
    """Collection schema, the unit registered in a database schema."""
    return DocumentNode(props=dict(props))


collection = document


def record(key: Union[StringNode, EnumNode], value: SchemaNode) -> RecordNode:
    """Mapping keyed by `key` (a string or enum node) with `value` for every entry."""
    return RecordNode(key=key, value=value)


# --- Wrappers & combinators --- #

def optional(node: SchemaNode) -> OptionalNode:
    return OptionalNode(type=node)


def default(node: SchemaNode, value: Any) -> DefaultNode:
    return DefaultNode(type=node, default_value=value)


def nullable(node: SchemaNode) -> UnionNode:
    return node.nullable()


def union(*types: SchemaNode) -> UnionNode:
    return UnionNode(types=types)


def intersection(*types: SchemaNode) -> IntersectionNode:
    return IntersectionNode(types=types)
