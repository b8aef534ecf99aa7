#!/usr/bin/env python3
"""
Core constants used across docschema.

- Artifact vocabulary: BSON type tags and keywords emitted by derivation.
- Naming: rules for collection names in a database schema.
- Defaults: connection and file-handling defaults used by the config layer.
- Regular expressions: compiled patterns used by validators.
"""

import re
from typing import Final

# --- Artifact vocabulary --- #

# Emitted `bsonType` tags for primitive kinds
BSON_NULL: Final[str] = "null"
BSON_BOOL: Final[str] = "bool"
BSON_DATE: Final[str] = "date"
BSON_BINARY: Final[str] = "binData"
BSON_OBJECT_ID: Final[str] = "objectId"
BSON_STRING: Final[str] = "string"
BSON_ARRAY: Final[str] = "array"
BSON_OBJECT: Final[str] = "object"

# Alias accepted by the store for any numeric subtype
BSON_NUMBER: Final[str] = "number"

# Key wrapping a derived artifact in a collection validator
JSON_SCHEMA_KEY: Final[str] = "$jsonSchema"

# Pattern used for string-keyed records that declare no key pattern
MATCH_ALL_PATTERN: Final[str] = "^.*$"


# --- Defaults --- #

DEFAULT_STORE_URI: Final[str] = "mongodb://localhost:27017"

# Default text encoding
DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"

# Collection names the store reserves for itself
RESERVED_COLLECTION_PREFIX: Final[str] = "system."


# --- Regular Expressions --- #
# Allowed collection names: leading letter/underscore, then letters, digits, dot, underscore, hyphen
COLLECTION_NAME_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9._-]*$")

# Allowed property names: anything without a leading '$' or an embedded NUL
PROPERTY_NAME_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[^$\x00][^\x00]*$")


# --- Runtime guard --- #
def validate_constants():
    """
    Ensure constants are valid at runtime.
    """
    if not re.compile(MATCH_ALL_PATTERN).fullmatch("any key"):
        raise RuntimeError(f"MATCH_ALL_PATTERN must match any key, got {MATCH_ALL_PATTERN!r}")
    if COLLECTION_NAME_ALLOWED_RE.fullmatch(RESERVED_COLLECTION_PREFIX.rstrip(".")) is None:
        raise RuntimeError("RESERVED_COLLECTION_PREFIX must be a valid collection name prefix")

validate_constants()
