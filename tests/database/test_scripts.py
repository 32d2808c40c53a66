from __future__ import annotations

import importlib.util
import logging
from pathlib import Path

import pytest

from config import testing

REPO_ROOT = Path(__file__).resolve().parents[2]


def _load(name: str):
    spec = importlib.util.spec_from_file_location(f"timekeeper_{name}", REPO_ROOT / "scripts" / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def testing_settings(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")


def test_init_db_reports_tables(monkeypatch, caplog):
    script = _load("init_db")
    applied = []
    monkeypatch.setattr(script, "apply_schema", lambda db, *, schema_path: applied.append((db["database"], schema_path)))
    monkeypatch.setattr(script, "list_tables", lambda db: ["users", "leaves"])

    with caplog.at_level(logging.INFO):
        assert script.main() == 0

    assert applied == [(testing.DB_CONFIG["database"], REPO_ROOT / "database" / "schema.sql")]
    assert "schema ready (tables=2): leaves, users" in caplog.text


def test_seed_db_reports_demo_accounts(monkeypatch, caplog):
    script = _load("seed_db")
    seeded = []
    monkeypatch.setattr(script, "apply_seed_sql", lambda db, *, seed_path: seeded.append(seed_path))
    monkeypatch.setattr(script, "ensure_demo_users", lambda db: ["admin", "employee"])

    with caplog.at_level(logging.INFO):
        assert script.main() == 0

    assert seeded == [REPO_ROOT / "database" / "seed.sql"]
    assert f"demo seed ready in {testing.DB_CONFIG['database']}: 2 accounts" in caplog.text
    assert "admin" in caplog.text
