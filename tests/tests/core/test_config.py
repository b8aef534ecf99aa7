#!/usr/bin/env python3
import json
from pathlib import Path
import pytest

import docschema.core.config as cfg


# --- Helpers --- #

def _write_json(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DOCSCHEMA_URI", "DOCSCHEMA_DATABASE", "DOCSCHEMA_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


# --- load_config: defaults only --- #

def test_load_config_defaults_only(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cfg, "GLOBAL_CONFIG_PATH", tmp_path / "no/such/config.json", raising=False)
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    assert cfg.load_config() == cfg.DEFAULT_CONFIG


def test_load_config_does_not_share_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cfg, "GLOBAL_CONFIG_PATH", tmp_path / "missing.json", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DOCSCHEMA_LOG_LEVEL", "DEBUG")

    cfg.load_config()
    assert cfg.DEFAULT_CONFIG["logging"]["level"] == "INFO"


# --- Precedence: global < project < env --- #

def test_load_config_global_and_project_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    global_cfg = tmp_path / ".config/docschema/config.json"
    project_dir = tmp_path / "proj"

    _write_json(global_cfg, {
        "logging": {"level": "DEBUG"},
        "uri": "mongodb://global:27017",
        "extra": 1,
    })
    _write_json(project_dir / "docschema.json", {
        "logging": {"level": "WARNING"},
        "database": "blog",
    })

    monkeypatch.setattr(cfg, "GLOBAL_CONFIG_PATH", global_cfg, raising=False)
    monkeypatch.chdir(project_dir)
    _clear_env(monkeypatch)

    result = cfg.load_config()

    # Project overrides global
    assert result["logging"]["level"] == "WARNING"
    assert result["database"] == "blog"
    # Values only in global propagate through
    assert result["uri"] == "mongodb://global:27017"
    assert result["extra"] == 1


# --- Env overrides --- #

def test_load_config_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _write_json(tmp_path / "docschema.json", {"database": "from_file"})
    monkeypatch.setattr(cfg, "GLOBAL_CONFIG_PATH", tmp_path / "missing.json", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DOCSCHEMA_URI", "  mongodb://env:27017  ")
    monkeypatch.setenv("DOCSCHEMA_DATABASE", "from_env")
    monkeypatch.setenv("DOCSCHEMA_LOG_LEVEL", "ERROR")

    result = cfg.load_config()

    assert result["uri"] == "mongodb://env:27017"
    assert result["database"] == "from_env"
    assert result["logging"]["level"] == "ERROR"


def test_load_config_invalid_json_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    (tmp_path / "docschema.json").write_text("{not json", encoding="utf-8")
    monkeypatch.setattr(cfg, "GLOBAL_CONFIG_PATH", tmp_path / "missing.json", raising=False)
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    with pytest.raises(ValueError, match="Invalid JSON"):
        cfg.load_config()
