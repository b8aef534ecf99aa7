"""
docschema: composable schemas for document databases.

Declare collections with node factories, then derive `$jsonSchema`
validators and fill defaults into documents before they are written.
"""

from docschema.core.errors import (
    DocSchemaError,
    InvalidRefError,
    StoreUnavailableError,
    UnknownCollectionError,
)
from docschema.core.schema import *  # noqa: F401,F403
from docschema.core.schema import __all__ as _schema_all
from docschema.core.app_context import AppContext, build_context
from docschema.core.config import load_config
from docschema.core.log import configure_logging

__version__ = "0.1.0"

__all__ = [
    *_schema_all,
    "DocSchemaError",
    "InvalidRefError",
    "StoreUnavailableError",
    "UnknownCollectionError",
    "AppContext",
    "build_context",
    "load_config",
    "configure_logging",
]
