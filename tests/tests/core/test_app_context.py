#!/usr/bin/env python3
import pytest
from dataclasses import FrozenInstanceError

import docschema as ds
import docschema.core.app_context as ac
from docschema.core.schema.registry import CollectionRegistry


def _db():
    return ds.database(users=ds.document({"email": ds.string()}))


def test_build_context_uses_load_config_when_config_missing(monkeypatch):
    cfg = {"database": "blog", "logging": {"level": "DEBUG"}}
    levels = []
    monkeypatch.setattr(ac, "load_config", lambda: cfg)
    monkeypatch.setattr(ac, "configure_logging", levels.append)

    db = _db()
    ctx = ac.build_context(db)

    assert ctx.config is cfg
    assert ctx.database is db
    assert isinstance(ctx.collections, CollectionRegistry)
    assert ctx.collections.names() == ["users"]
    assert levels == ["DEBUG"]


def test_build_context_with_explicit_config_and_store(monkeypatch):
    monkeypatch.setattr(ac, "load_config", lambda: (_ for _ in ()).throw(AssertionError("should not be called")))
    monkeypatch.setattr(ac, "configure_logging", lambda level: (_ for _ in ()).throw(AssertionError("no logging setup")))

    store = {"users": object()}
    cfg = {"database": "blog"}
    ctx = ac.build_context(_db(), store=store, config=cfg, configure_logs=False)

    assert ctx.config is cfg
    assert ctx.collections.store is store
    assert ctx.collections.raw("users") is store["users"]


def test_build_context_defaults_log_level(monkeypatch):
    levels = []
    monkeypatch.setattr(ac, "configure_logging", levels.append)

    ac.build_context(_db(), config={"database": None})
    assert levels == ["INFO"]


def test_appcontext_is_frozen_dataclass(monkeypatch):
    monkeypatch.setattr(ac, "configure_logging", lambda level: None)
    ctx = ac.build_context(_db(), config={"logging": {"level": "INFO"}})

    with pytest.raises(FrozenInstanceError):
        ctx.config = {}


def test_build_context_exported_at_package_root():
    assert ds.build_context is ac.build_context
    assert ds.AppContext is ac.AppContext
