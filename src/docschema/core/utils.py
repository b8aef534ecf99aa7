#!/usr/bin/env python3
"""
Purpose:
    Provides common utility functions such as value-shape predicates, regex
    source extraction, name validation, dictionary merge, and file I/O
    utilities for docschema.
"""

import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Union

from docschema.core.constants import (
    COLLECTION_NAME_ALLOWED_RE, PROPERTY_NAME_ALLOWED_RE,
    RESERVED_COLLECTION_PREFIX, DEFAULT_TEXT_ENCODING
)


# --- Shape Predicates --- #

def is_plain_mapping(value: Any) -> bool:
    """Return True for mapping values (dicts and dict-likes), the shape objects fill into."""
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    """
    Return True for list-like values arrays fill element-wise.

    Strings, bytes and mappings are never treated as sequences.
    """
    return isinstance(value, (list, tuple))


# --- Validation Helpers --- #

def is_valid_collection_name(name: str) -> bool:
    """Return True if the collection name matches the allowed pattern and is not reserved."""
    if name.startswith(RESERVED_COLLECTION_PREFIX):
        return False
    return bool(COLLECTION_NAME_ALLOWED_RE.fullmatch(name))


def is_valid_property_name(name: str) -> bool:
    """Return True if the property name can be stored (no leading '$', no NUL)."""
    return bool(PROPERTY_NAME_ALLOWED_RE.fullmatch(name))


# --- Pattern Utilities --- #

def pattern_source(pattern: Union[str, "re.Pattern[str]"]) -> str:
    """
    Reduce a pattern to portable source text.

    Compiled patterns give up their `.pattern`; plain strings are returned as-is.

    Example:
        pattern_source(re.compile(r"^[a-z]+$")) -> "^[a-z]+$"
    """
    if isinstance(pattern, re.Pattern):
        return pattern.pattern
    return pattern


# --- Generic Utilities --- #

def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries (values from 'override' take precedence).
    Non-dict values are overwritten; dict values are merged depth-first.
    """
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# --- File I/O Helpers --- #

def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON file from 'path'. Returns an empty dict if the file is missing.

    Raises:
        ValueError: if the file exists but contains invalid JSON.
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding=DEFAULT_TEXT_ENCODING) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {str(path)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e
