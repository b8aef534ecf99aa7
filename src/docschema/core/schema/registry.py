#!/usr/bin/env python3
"""
Purpose:
    Implements the CollectionRegistry for docschema, which turns a
    DatabaseSchema into one handle per declared collection, rejects lookups
    of undeclared names, and gives explicit access to raw store handles.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from docschema.core.errors import StoreUnavailableError, UnknownCollectionError
from docschema.core.log import get_logger
from docschema.core.schema.database_schema import DatabaseSchema, RefEntry
from docschema.core.schema.nodes import DocumentNode

logger = get_logger(__name__)


@dataclass(frozen=True)
class CollectionHandle:
    """
    Schema-aware handle for one declared collection.
    - name: collection name
    - schema: the collection's document node
    - store: raw store (database) object the handle resolves against, if any
    """
    name: str
    schema: DocumentNode
    store: Optional[Any] = field(default=None, repr=False, compare=False)

    @property
    def indexes(self) -> Tuple[Any, ...]:
        return self.schema.indexes

    def bson_schema(self) -> Dict[str, Any]:
        return self.schema.bson_schema()

    def validator(self) -> Dict[str, Any]:
        return self.schema.validator()

    def fill(self, value: Any) -> Any:
        """Normalize a document about to be written to this collection."""
        return self.schema.fill(value)

    def raw(self) -> Any:
        """Raw store collection for this handle."""
        return _raw_collection(self.store, self.name)


class CollectionRegistry:
    """
    Name -> handle mapping built eagerly from a DatabaseSchema.

    The store is duck-typed: anything indexable by collection name
    (`store[name]`), such as a driver's database object.
    """

    def __init__(self, database: DatabaseSchema, store: Optional[Any] = None):
        self._database = database
        self._store = store
        self._handles: Dict[str, CollectionHandle] = {
            name: CollectionHandle(name=name, schema=doc, store=store)
            for name, doc in database.collections.items()
        }
        logger.debug(
            "collection_registry_built",
            collections=self.names(),
            has_store=store is not None,
        )

    # --- Query API --- #

    def collection(self, name: str) -> CollectionHandle:
        """Return the handle for `name` or raise UnknownCollectionError."""
        handle = self._handles.get(name)
        if handle is None:
            raise UnknownCollectionError(name, self._handles.keys())
        return handle

    def get(self, name: str) -> Optional[CollectionHandle]:
        """Return the handle for `name`, or None."""
        return self._handles.get(name)

    def raw(self, name: str) -> Any:
        """
        Raw store collection by name, bypassing the schema.

        Undeclared names are allowed here; this is the escape hatch for
        collections the schema does not describe.
        """
        return _raw_collection(self._store, name)

    def names(self) -> List[str]:
        """Declared collection names, in declaration order."""
        return list(self._handles.keys())

    def referrers(self, target: str) -> List[RefEntry]:
        """References (with delete policies) pointing at `target`."""
        self.collection(target)
        return self._database.referrers(target)

    @property
    def database(self) -> DatabaseSchema:
        return self._database

    @property
    def store(self) -> Optional[Any]:
        return self._store

    def __getitem__(self, name: str) -> CollectionHandle:
        return self.collection(name)

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def __iter__(self) -> Iterator[CollectionHandle]:
        return iter(self._handles.values())

    def __len__(self) -> int:
        return len(self._handles)


# --- Internals --- #

def _raw_collection(store: Optional[Any], name: str) -> Any:
    if store is None:
        raise StoreUnavailableError(f"No store attached; cannot resolve raw collection {name!r}")
    return store[name]
