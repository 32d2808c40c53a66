from __future__ import annotations

from pathlib import Path

from src.timekeeper.timekeeper.database.bootstrap import split_statements

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_split_drops_comments_and_database_switches():
    sql = """
    CREATE DATABASE IF NOT EXISTS anything;
    USE anything;
    -- a comment; with a semicolon
    CREATE TABLE a (id INT);
    INSERT INTO a VALUES (1);
    """

    assert split_statements(sql) == ["CREATE TABLE a (id INT)", "INSERT INTO a VALUES (1)"]


def test_bundled_schema_defines_every_table():
    statements = split_statements((REPO_ROOT / "database" / "schema.sql").read_text(encoding="utf-8"))

    created = [s.split("(")[0].split()[-1] for s in statements if s.upper().startswith("CREATE TABLE")]
    assert created == ["users", "attendance_sessions", "attendance_adjustments", "leaves"]
