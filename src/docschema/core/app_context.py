#!/usr/bin/env python3
"""
Purpose:
    Wires together the docschema application context by merging configuration,
    configuring logging, and building the collection registry for a database
    schema.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from docschema.core.config import load_config
from docschema.core.log import configure_logging, get_logger
from docschema.core.schema.database_schema import DatabaseSchema
from docschema.core.schema.registry import CollectionRegistry


# --- Data model --- #

@dataclass(frozen=True)
class AppContext:
    """Immutable container for configuration, the database schema and its registry."""
    config: Dict[str, Any]
    database: DatabaseSchema
    collections: CollectionRegistry


# --- Factory --- #

def build_context(
    database: DatabaseSchema,
    *,
    store: Optional[Any] = None,
    config: Optional[Dict[str, Any]] = None,
    configure_logs: bool = True,
) -> AppContext:
    """
    Build an `AppContext`.

    Args:
        database:
            The (already validated) database schema to expose.
        store:
            Optional raw store object indexable by collection name. The
            connection itself is owned by the caller.
        config:
            Pre-merged configuration. If omitted, `load_config()` is used.
        configure_logs:
            If True, configures structlog from `config['logging']['level']`.

    Returns:
        AppContext: immutable bundle of config, database schema, and registry.
    """
    cfg = config or load_config()

    if configure_logs:
        configure_logging(cfg.get("logging", {}).get("level", "INFO"))

    registry = CollectionRegistry(database, store=store)
    get_logger(__name__).info(
        "context_built",
        database=cfg.get("database"),
        collections=registry.names(),
    )
    return AppContext(config=cfg, database=database, collections=registry)
