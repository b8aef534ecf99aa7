#!/usr/bin/env python3
"""
Purpose:
    Defines the DatabaseSchema model: the mapping from collection name to
    document schema that a store is set up from. Building one validates the
    collection names and every `ref` target in a single pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from docschema.core.errors import InvalidRefError, UnknownCollectionError
from docschema.core.log import get_logger
from docschema.core.schema.node_kind import DeletePolicy, NodeKind
from docschema.core.schema.nodes import DocumentNode
from docschema.core.utils import is_valid_collection_name
from docschema.core.validation import ValidationResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class RefEntry:
    """
    One reference declared somewhere in a database schema.
    - collection: name of the collection declaring the reference
    - path: dotted path of the field within that collection ("[]" marks array items, "{}" record values)
    - target: name of the referenced collection
    - delete_policy: policy an external cascade mechanism applies (None when unset)
    """
    collection: str
    path: str
    target: str
    delete_policy: Optional[DeletePolicy] = None


# --- Model --- #

class DatabaseSchema(BaseModel):
    """
    Named document schemas forming one database.

    Notes:
    ------
    On construction we:
        1) validate every collection name
        2) check every `ref` node names a declared collection, reporting all
           dangling references together as one `InvalidRefError`
    Collections are stored as ordered `(name, document)` pairs and exposed
    read-only through `collections`, so the name set `ref` checks ran against
    cannot change.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    collection_items: Tuple[Tuple[str, DocumentNode], ...] = ()

    # --- Normalization / Validation --- #

    @model_validator(mode="before")
    @classmethod
    def _collections_to_items(cls, data: Any) -> Any:
        if isinstance(data, dict) and "collections" in data:
            data = dict(data)
            data["collection_items"] = tuple(dict(data.pop("collections")).items())
        return data

    @field_validator("collection_items")
    @classmethod
    def _validate_names(cls, v: Tuple[Tuple[str, DocumentNode], ...]) -> Tuple[Tuple[str, DocumentNode], ...]:
        names = [name for name, _ in v]
        bad = sorted(name for name in names if not is_valid_collection_name(name))
        if bad:
            raise ValueError(f"Invalid collection name(s): {bad}")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate collection name(s) in {names}")
        return v

    @property
    def collections(self) -> Mapping[str, DocumentNode]:
        """Collection schemas by name, in declaration order, as a read-only mapping."""
        return MappingProxyType(dict(self.collection_items))

    @model_validator(mode="after")
    def _post_init(self) -> "DatabaseSchema":
        self._check_refs()
        logger.debug(
            "database_schema_built",
            collections=len(self.collections),
            refs=len(self.refs()),
        )
        return self

    def _check_refs(self) -> None:
        result = ValidationResult()
        declared = self.collections
        for entry in self.refs():
            if entry.target not in declared:
                location = f"{entry.collection}.{entry.path}" if entry.path else entry.collection
                result.report(f"{location} references unknown collection {entry.target!r}")
        if not result.is_valid():
            logger.warning("invalid_ref_targets", count=len(result), errors=result.errors)
        result.raise_if_invalid(InvalidRefError)

    # --- Lookup --- #

    def names(self) -> List[str]:
        """Collection names in declaration order."""
        return list(self.collections.keys())

    def get(self, name: str) -> Optional[DocumentNode]:
        """Return the document schema for `name`, or None."""
        return self.collections.get(name)

    def require(self, name: str) -> DocumentNode:
        """Return the document schema for `name` or raise UnknownCollectionError."""
        doc = self.get(name)
        if doc is None:
            raise UnknownCollectionError(name, self.collections.keys())
        return doc

    def __contains__(self, name: object) -> bool:
        return name in self.collections

    # --- Derivations --- #

    def bson_schemas(self) -> Dict[str, Dict[str, Any]]:
        """Validation artifact of every collection, keyed by name."""
        return {name: doc.bson_schema() for name, doc in self.collections.items()}

    def validators(self) -> Dict[str, Dict[str, Any]]:
        """`{"$jsonSchema": ...}` validator of every collection, keyed by name."""
        return {name: doc.validator() for name, doc in self.collections.items()}

    def refs(self) -> List[RefEntry]:
        """Every `ref` node in the database, in declaration order."""
        entries: List[RefEntry] = []
        for name, doc in self.collections.items():
            for path, node in doc.walk():
                if node.kind == NodeKind.REF:
                    entries.append(RefEntry(name, path, node.ref, node.delete_policy))
        return entries

    def referrers(self, target: str) -> List[RefEntry]:
        """References pointing at collection `target` (what a cascade delete must visit)."""
        return [e for e in self.refs() if e.target == target]


# --- Factory --- #

def database(collections: Optional[Mapping[str, DocumentNode]] = None, **named: DocumentNode) -> DatabaseSchema:
    """
    Build a DatabaseSchema from a mapping and/or keyword arguments.

    Raises:
        InvalidRefError: if any `ref` names an undeclared collection
        ValidationError: if a collection name is invalid or a value is not a document node
    """
    merged: Dict[str, DocumentNode] = {**dict(collections or {}), **named}
    return DatabaseSchema(collections=merged)
