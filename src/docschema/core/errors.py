#!/usr/bin/env python3
"""
Purpose:
    Exception hierarchy for docschema.

    Derivation and fill never raise on their own; these errors cover schema
    well-formedness (dangling references) and the collection registry.
"""

from __future__ import annotations

from typing import Iterable, List


class DocSchemaError(Exception):
    """Base class for every error raised by docschema."""


class InvalidRefError(DocSchemaError):
    """
    One or more `ref` nodes name a collection missing from the database schema.

    Raised once, when the database schema is built, listing every offending
    reference rather than stopping at the first. Not a `ValueError`, so
    pydantic propagates it unwrapped.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        lines = "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(f"Invalid reference target(s) ({len(self.errors)}):\n{lines}")


class UnknownCollectionError(DocSchemaError, LookupError):
    """A collection name was looked up that the database schema does not declare."""

    def __init__(self, name: str, known: Iterable[str] = ()):
        self.name = name
        self.known: List[str] = sorted(known)
        hint = f"; known collections: {', '.join(self.known)}" if self.known else ""
        super().__init__(f"Unknown collection: {name!r}{hint}")


class StoreUnavailableError(DocSchemaError):
    """A raw store handle was requested from a registry built without a store."""
