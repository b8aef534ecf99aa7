#!/usr/bin/env python3
"""
docschema configuration loader.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Final

from docschema.core.constants import DEFAULT_STORE_URI
from docschema.core.utils import merge_dicts, load_json_file

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "uri": DEFAULT_STORE_URI,
    "database": None,
    "logging": {"level": "INFO"},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "docschema" / "config.json"

PROJECT_CONFIG_NAME: Final[str] = "docschema.json"


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load docschema configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/docschema/config.json)
        3. Project config (./docschema.json)
        4. Environment overrides:
           - DOCSCHEMA_URI
           - DOCSCHEMA_DATABASE
           - DOCSCHEMA_LOG_LEVEL

    Returns:
        A merged configuration dictionary.
    """
    # 1) start with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)

    # 2) global config
    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    # 3) project config
    project_path = Path.cwd() / PROJECT_CONFIG_NAME
    config = merge_dicts(config, load_json_file(project_path))

    # 4) environment overrides
    uri_env = os.getenv("DOCSCHEMA_URI")
    if uri_env:
        config["uri"] = uri_env.strip()

    database_env = os.getenv("DOCSCHEMA_DATABASE")
    if database_env:
        config["database"] = database_env.strip()

    log_level_env = os.getenv("DOCSCHEMA_LOG_LEVEL")
    if log_level_env:
        config.setdefault("logging", {})["level"] = log_level_env

    return config
