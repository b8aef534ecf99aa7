#!/usr/bin/env python3
"""
Purpose:
    Implements the schema node algebra: one frozen Pydantic model per node
    kind, tagged by `kind`, plus the combinators every node shares.

    Nodes are immutable. Every combinator and option setter returns a new
    node; children are shared between a node and the nodes derived from it,
    which is safe because children are immutable too.

    Derivation (`bson_schema`) and default-filling (`fill`) dispatch on
    `kind` in `derive` and `fill`; `required()` is answered by the node.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from docschema.core.constants import JSON_SCHEMA_KEY
from docschema.core.schema.derive import bson_schema as _derive
from docschema.core.schema.fill_engine import MISSING, fill as _fill
from docschema.core.schema.node_kind import DeletePolicy, NodeKind, NumberType
from docschema.core.schema.options import (
    NodeOptions,
    StringOptions,
    NumberOptions,
    ArrayOptions,
    ObjectOptions,
    DocumentOptions,
    RecordOptions,
    RefOptions,
    UnionOptions,
)
from docschema.core.utils import is_valid_property_name


# --- Base node --- #

class SchemaNode(BaseModel):
    """
    Common surface of every schema node.

    Subclasses pin `kind` to their tag and narrow `options` to their options
    model. Child nodes live in variant-specific fields (`items`, `prop_items`,
    `key`/`value`, `type`, `types`).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: NodeKind
    options: NodeOptions = Field(default_factory=NodeOptions)

    # --- Derivations --- #

    def bson_schema(self) -> Dict[str, Any]:
        """Validation document for this node (see `derive.bson_schema`)."""
        return _derive(self)

    def fill(self, value: Any = MISSING) -> Any:
        """Normalize `value` by applying declared defaults (see `fill_engine.fill`)."""
        return _fill(self, value)

    def required(self) -> bool:
        """Whether absence of this node from its enclosing mapping is disallowed."""
        return True

    # --- Metadata --- #

    def title(self, title: str) -> "SchemaNode":
        return self._with_options(title=title)

    def description(self, description: str) -> "SchemaNode":
        return self._with_options(description=description)

    # --- Combinators --- #

    def array(self) -> "ArrayNode":
        """Array whose items are this node."""
        return ArrayNode(items=self)

    def record(self) -> "RecordNode":
        """Record keyed by any string, with this node as the value."""
        return RecordNode(key=StringNode(), value=self)

    def or_(self, *others: "SchemaNode") -> "UnionNode":
        """Union of this node followed by `others`."""
        return UnionNode(types=(self, *others))

    def and_(self, *others: "SchemaNode") -> "IntersectionNode":
        """Intersection of this node followed by `others`."""
        return IntersectionNode(types=(self, *others))

    def optional(self) -> "OptionalNode":
        return OptionalNode(type=self)

    def nullable(self) -> "UnionNode":
        """Union of this node and `null`."""
        return UnionNode(types=(self, NullNode()))

    def nullish(self) -> "OptionalNode":
        """Nullable and optional."""
        return self.nullable().optional()

    def default(self, value: Any) -> "DefaultNode":
        """
        Wrap this node with a default.

        `value` is either a literal or a zero-argument producer; producers are
        called at fill time, once per absent value, never here.
        """
        return DefaultNode(type=self, default_value=value)

    # --- Traversal --- #

    def children(self) -> Tuple[Tuple[str, "SchemaNode"], ...]:
        """
        Direct child nodes paired with their path segment.

        Segments: ".name" for properties, "[]" for array items, "{}" for
        record values, "" for wrapped and combined members.
        """
        return ()

    def walk(self, path: str = "") -> Iterator[Tuple[str, "SchemaNode"]]:
        """Depth-first walk yielding `(path, node)` for this node and every descendant."""
        yield path, self
        for segment, child in self.children():
            child_path = f"{path}{segment}" if path else segment.lstrip(".")
            yield from child.walk(child_path)

    # --- Helpers --- #

    def _with_options(self, **changes: Any):
        return self.model_copy(update={"options": self.options.with_(**changes)})


# --- Primitive nodes --- #

class NullNode(SchemaNode):
    kind: Literal[NodeKind.NULL] = NodeKind.NULL


class BoolNode(SchemaNode):
    kind: Literal[NodeKind.BOOL] = NodeKind.BOOL


class DateNode(SchemaNode):
    kind: Literal[NodeKind.DATE] = NodeKind.DATE


class BinaryNode(SchemaNode):
    kind: Literal[NodeKind.BINARY] = NodeKind.BINARY


class ObjectIdNode(SchemaNode):
    kind: Literal[NodeKind.OBJECT_ID] = NodeKind.OBJECT_ID


class RefNode(SchemaNode):
    """
    ObjectId referencing a document of another collection.

    `ref` names the target collection; it is checked against the enclosing
    database schema when that schema is built. The delete policy is carried
    for an external cascade mechanism and never enforced here.
    """

    kind: Literal[NodeKind.REF] = NodeKind.REF
    options: RefOptions = Field(default_factory=RefOptions)
    ref: str = Field(..., min_length=1, description="Target collection name.")

    @property
    def delete_policy(self) -> Optional[DeletePolicy]:
        policy = self.options.delete_policy
        return None if policy is None else DeletePolicy(policy)

    def delete(self, policy: Union[str, DeletePolicy]) -> "RefNode":
        """Set the delete policy (bypass, reject, cascade, nullify or unset)."""
        return self._with_options(delete_policy=policy)


class EnumNode(SchemaNode):
    """
    Fixed set of literal values.

    A value of `MISSING` declares that the field may be absent, which makes
    the node not required; `MISSING` itself is never emitted.
    """

    kind: Literal[NodeKind.ENUM] = NodeKind.ENUM
    values: Tuple[Any, ...] = Field(..., min_length=1)

    def required(self) -> bool:
        return all(v is not MISSING for v in self.values)

    def present_values(self) -> Tuple[Any, ...]:
        """Declared values other than `MISSING`, in order."""
        return tuple(v for v in self.values if v is not MISSING)

    def key_names(self) -> List[str]:
        """Present values as mapping keys (non-strings are converted with `str`)."""
        return [v if isinstance(v, str) else str(v) for v in self.present_values()]


class StringNode(SchemaNode):
    kind: Literal[NodeKind.STRING] = NodeKind.STRING
    options: StringOptions = Field(default_factory=StringOptions)

    def min(self, min_length: int) -> "StringNode":
        return self._with_options(min_length=min_length)

    def max(self, max_length: int) -> "StringNode":
        return self._with_options(max_length=max_length)

    def pattern(self, pattern) -> "StringNode":
        """Constrain values to a regex, given as source text or a compiled pattern."""
        return self._with_options(pattern=pattern)


class NumberNode(SchemaNode):
    """Numeric scalar; with no subtype the artifact uses the `number` alias."""

    kind: Literal[NodeKind.NUMBER] = NodeKind.NUMBER
    options: NumberOptions = Field(default_factory=NumberOptions)

    def int_(self) -> "NumberNode":
        return self._with_options(type=NumberType.INT)

    def long(self) -> "NumberNode":
        return self._with_options(type=NumberType.LONG)

    def decimal(self) -> "NumberNode":
        return self._with_options(type=NumberType.DECIMAL)

    def double(self) -> "NumberNode":
        return self._with_options(type=NumberType.DOUBLE)

    def min(self, minimum: Union[int, float]) -> "NumberNode":
        return self._with_options(minimum=minimum)

    def max(self, maximum: Union[int, float]) -> "NumberNode":
        return self._with_options(maximum=maximum)

    def exclusive_min(self, exclusive: bool = True) -> "NumberNode":
        return self._with_options(exclusive_minimum=exclusive)

    def exclusive_max(self, exclusive: bool = True) -> "NumberNode":
        return self._with_options(exclusive_maximum=exclusive)

    def multiple_of(self, multiple_of: Union[int, float]) -> "NumberNode":
        return self._with_options(multiple_of=multiple_of)


# --- Composite nodes --- #

class ArrayNode(SchemaNode):
    kind: Literal[NodeKind.ARRAY] = NodeKind.ARRAY
    options: ArrayOptions = Field(default_factory=ArrayOptions)
    items: SchemaNode

    def min(self, min_items: int) -> "ArrayNode":
        return self._with_options(min_items=min_items)

    def max(self, max_items: int) -> "ArrayNode":
        return self._with_options(max_items=max_items)

    def unique(self) -> "ArrayNode":
        return self._with_options(unique_items=True)

    def children(self) -> Tuple[Tuple[str, SchemaNode], ...]:
        return (("[]", self.items),)


class ObjectNode(SchemaNode):
    """
    Mapping with named child nodes.

    Properties are stored as an ordered tuple of `(name, node)` pairs and
    exposed read-only through `props`. Order is kept so derived artifacts are
    deterministic; the artifact's `required` list holds exactly the
    properties whose node reports `required()`.
    """

    kind: Literal[NodeKind.OBJECT] = NodeKind.OBJECT
    options: ObjectOptions = Field(default_factory=ObjectOptions)
    prop_items: Tuple[Tuple[str, SchemaNode], ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _props_to_items(cls, data: Any) -> Any:
        if isinstance(data, dict) and "props" in data:
            data = dict(data)
            data["prop_items"] = tuple(dict(data.pop("props")).items())
        return data

    @field_validator("prop_items")
    @classmethod
    def _validate_prop_names(cls, v: Tuple[Tuple[str, SchemaNode], ...]) -> Tuple[Tuple[str, SchemaNode], ...]:
        names = [name for name, _ in v]
        bad = [name for name in names if not is_valid_property_name(name)]
        if bad:
            raise ValueError(f"Invalid property name(s) {bad}: names must be non-empty and must not start with '$'")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate property name(s) in {names}")
        return v

    @property
    def props(self) -> Mapping[str, SchemaNode]:
        """Declared properties in order, as a read-only mapping."""
        return MappingProxyType(dict(self.prop_items))

    def strict(self):
        """Disallow properties not declared in `props`."""
        return self._with_options(additional_properties=False)

    def required_keys(self) -> List[str]:
        return [name for name, child in self.prop_items if child.required()]

    def children(self) -> Tuple[Tuple[str, SchemaNode], ...]:
        return tuple((f".{name}", child) for name, child in self.prop_items)


class DocumentNode(ObjectNode):
    """
    Collection schema: an object schema plus index descriptors.

    This is the unit registered under a name in a `DatabaseSchema`.
    """

    kind: Literal[NodeKind.DOCUMENT] = NodeKind.DOCUMENT
    options: DocumentOptions = Field(default_factory=DocumentOptions)

    @property
    def indexes(self) -> Tuple[Any, ...]:
        return self.options.indexes

    def index(self, descriptor: Any) -> "DocumentNode":
        """Append an (opaque) index descriptor."""
        return self._with_options(indexes=(*self.options.indexes, descriptor))

    def validator(self) -> Dict[str, Any]:
        """Collection validator document wrapping the derived artifact."""
        return {JSON_SCHEMA_KEY: self.bson_schema()}


class RecordNode(SchemaNode):
    """
    Open mapping keyed by a string node (optionally patterned) or an enum node.

    With an enum key the artifact lists one property per enum value; with a
    string key it emits a single pattern-keyed entry.
    """

    kind: Literal[NodeKind.RECORD] = NodeKind.RECORD
    options: RecordOptions = Field(default_factory=RecordOptions)
    key: Union[StringNode, EnumNode]
    value: SchemaNode

    def strict(self) -> "RecordNode":
        return self._with_options(additional_properties=False)

    def min(self, min_properties: int) -> "RecordNode":
        return self._with_options(min_properties=min_properties)

    def max(self, max_properties: int) -> "RecordNode":
        return self._with_options(max_properties=max_properties)

    def children(self) -> Tuple[Tuple[str, SchemaNode], ...]:
        return (("{}", self.value),)


# --- Wrappers --- #

class OptionalNode(SchemaNode):
    """Inner node that may be absent; derivation passes straight through."""

    kind: Literal[NodeKind.OPTIONAL] = NodeKind.OPTIONAL
    type: SchemaNode

    def required(self) -> bool:
        return False

    def children(self) -> Tuple[Tuple[str, SchemaNode], ...]:
        return (("", self.type),)


class DefaultNode(SchemaNode):
    """Inner node with a literal or produced default applied at fill time."""

    kind: Literal[NodeKind.DEFAULT] = NodeKind.DEFAULT
    type: SchemaNode
    default_value: Any

    def children(self) -> Tuple[Tuple[str, SchemaNode], ...]:
        return (("", self.type),)


# --- Combinators --- #

class UnionNode(SchemaNode):
    """Value matching any member (or exactly one, once `exclusive()`)."""

    kind: Literal[NodeKind.UNION] = NodeKind.UNION
    options: UnionOptions = Field(default_factory=UnionOptions)
    types: Tuple[SchemaNode, ...] = Field(..., min_length=1)

    def exclusive(self) -> "UnionNode":
        return self._with_options(exclusive=True)

    def required(self) -> bool:
        return all(t.required() for t in self.types)

    def children(self) -> Tuple[Tuple[str, SchemaNode], ...]:
        return tuple(("", t) for t in self.types)


class IntersectionNode(SchemaNode):
    """Value matching every member."""

    kind: Literal[NodeKind.INTERSECTION] = NodeKind.INTERSECTION
    types: Tuple[SchemaNode, ...] = Field(..., min_length=1)

    def required(self) -> bool:
        return any(t.required() for t in self.types)

    def children(self) -> Tuple[Tuple[str, SchemaNode], ...]:
        return tuple(("", t) for t in self.types)
