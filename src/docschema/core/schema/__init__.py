"""Schema node algebra, derivations, database schema and collection registry."""

from docschema.core.schema.node_kind import NodeKind, DeletePolicy, NumberType
from docschema.core.schema.fill_engine import MISSING, fill
from docschema.core.schema.derive import bson_schema
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
from docschema.core.schema.factories import (
    null,
    bool_,
    date,
    binary,
    object_id,
    ref,
    enum,
    string,
    number,
    int_,
    long,
    decimal,
    double,
    array,
    object_,
    document,
    collection,
    record,
    optional,
    default,
    nullable,
    union,
    intersection,
)
from docschema.core.schema.database_schema import DatabaseSchema, RefEntry, database
from docschema.core.schema.registry import CollectionHandle, CollectionRegistry

__all__ = [
    "NodeKind", "DeletePolicy", "NumberType", "MISSING", "fill", "bson_schema",
    "SchemaNode", "NullNode", "BoolNode", "DateNode", "BinaryNode", "ObjectIdNode",
    "RefNode", "EnumNode", "StringNode", "NumberNode", "ArrayNode", "ObjectNode",
    "DocumentNode", "RecordNode", "OptionalNode", "DefaultNode", "UnionNode",
    "IntersectionNode",
    "null", "bool_", "date", "binary", "object_id", "ref", "enum", "string",
    "number", "int_", "long", "decimal", "double", "array", "object_", "document",
    "collection", "record", "optional", "default", "nullable", "union", "intersection",
    "DatabaseSchema", "RefEntry", "database", "CollectionHandle", "CollectionRegistry",
]
