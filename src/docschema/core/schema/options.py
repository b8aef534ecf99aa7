#!/usr/bin/env python3
"""
Purpose:
    Defines frozen Pydantic option models for each schema node kind. Field
    aliases are the keys emitted into the derived validation artifact, so an
    options model dumps straight into the artifact by alias.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from docschema.core.schema.node_kind import DeletePolicy, NumberType


# --- Base options --- #

class NodeOptions(BaseModel):
    """Options every node kind accepts (annotation-only metadata)."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
    )

    title: Optional[str] = Field(default=None, description="Short human-readable title.")
    description: Optional[str] = Field(default=None, description="Human-readable description.")

    def with_(self, **changes: Any) -> "NodeOptions":
        """Return a validated copy with the given fields (by Python name) replaced."""
        return type(self)(**{**dict(self), **changes})

    def artifact_fields(self, exclude: Iterable[str] = ()) -> Dict[str, Any]:
        """Set options keyed by artifact name; unset options are left out."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude=set(exclude))


def _check_bounds(lo: Optional[float], hi: Optional[float], lo_name: str, hi_name: str) -> None:
    if lo is not None and hi is not None and lo > hi:
        raise ValueError(f"{lo_name} ({lo}) must not exceed {hi_name} ({hi})")


# --- Per-kind options --- #

class StringOptions(NodeOptions):
    """Length and pattern constraints for string nodes."""

    min_length: Optional[int] = Field(default=None, ge=0, alias="minLength")
    max_length: Optional[int] = Field(default=None, ge=0, alias="maxLength")
    pattern: Optional[Union[str, re.Pattern]] = Field(
        default=None,
        description="Regex as source text or a compiled pattern; emitted as source text.",
    )

    @field_validator("pattern")
    @classmethod
    def _text_pattern(cls, v: Optional[Union[str, re.Pattern]]) -> Optional[Union[str, re.Pattern]]:
        if isinstance(v, re.Pattern) and not isinstance(v.pattern, str):
            raise ValueError("pattern must be text; compiled bytes patterns are not supported")
        return v

    @model_validator(mode="after")
    def _post(self) -> "StringOptions":
        _check_bounds(self.min_length, self.max_length, "minLength", "maxLength")
        return self


class NumberOptions(NodeOptions):
    """Subtype and range constraints for number nodes."""

    type: Optional[NumberType] = Field(default=None, description="Emitted as the bsonType tag.")
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    exclusive_minimum: Optional[bool] = Field(default=None, alias="exclusiveMinimum")
    exclusive_maximum: Optional[bool] = Field(default=None, alias="exclusiveMaximum")
    multiple_of: Optional[Union[int, float]] = Field(default=None, alias="multipleOf")

    @field_validator("multiple_of")
    @classmethod
    def _positive_multiple(cls, v: Optional[Union[int, float]]) -> Optional[Union[int, float]]:
        if v is not None and v <= 0:
            raise ValueError("multipleOf must be greater than 0")
        return v

    @model_validator(mode="after")
    def _post(self) -> "NumberOptions":
        _check_bounds(self.minimum, self.maximum, "minimum", "maximum")
        return self


class ArrayOptions(NodeOptions):
    """Size and uniqueness constraints for array nodes."""

    min_items: Optional[int] = Field(default=None, ge=0, alias="minItems")
    max_items: Optional[int] = Field(default=None, ge=0, alias="maxItems")
    unique_items: Optional[bool] = Field(default=None, alias="uniqueItems")

    @model_validator(mode="after")
    def _post(self) -> "ArrayOptions":
        _check_bounds(self.min_items, self.max_items, "minItems", "maxItems")
        return self


class ObjectOptions(NodeOptions):
    """Options for object nodes; `strict()` sets additionalProperties to false."""

    additional_properties: Optional[bool] = Field(default=None, alias="additionalProperties")


class DocumentOptions(ObjectOptions):
    """
    Options for document (collection) nodes.

    `indexes` are opaque index descriptors accumulated by `index()`; they are
    handed to the store when the collection is created and are not part of
    the validation artifact.
    """

    indexes: Tuple[Any, ...] = Field(default=(), description="Index descriptors, in declaration order.")


class RecordOptions(NodeOptions):
    """Options for record nodes."""

    additional_properties: Optional[bool] = Field(default=None, alias="additionalProperties")
    min_properties: Optional[int] = Field(default=None, ge=0, alias="minProperties")
    max_properties: Optional[int] = Field(default=None, ge=0, alias="maxProperties")

    @model_validator(mode="after")
    def _post(self) -> "RecordOptions":
        _check_bounds(self.min_properties, self.max_properties, "minProperties", "maxProperties")
        return self


class RefOptions(NodeOptions):
    """
    Options for reference nodes.

    `delete_policy` is metadata for an external cascade-delete mechanism and is
    never emitted into the validation artifact.
    """

    delete_policy: Optional[DeletePolicy] = Field(default=None, alias="deletePolicy")

    @field_validator("delete_policy", mode="before")
    @classmethod
    def _parse_policy(cls, v: Any) -> Optional[DeletePolicy]:
        return None if v is None else DeletePolicy.parse(v)


class UnionOptions(NodeOptions):
    """Options for union nodes; `exclusive` selects oneOf over anyOf."""

    exclusive: Optional[bool] = None
