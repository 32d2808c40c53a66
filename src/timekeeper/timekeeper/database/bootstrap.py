from __future__ import annotations

import logging
import re
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Iterator

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "timekeeper_db"

# (username, password, role, first_name, last_name)
DEMO_USERS = (
    ("admin", "admin123", "ADMIN", "Admin", "Demo"),
    ("employee", "employee123", "EMPLOYEE", "Erin", "Employee"),
)

_COMMENT_LINE = re.compile(r"(?m)^\s*--.*$")
_DB_SWITCH = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;")


def _db_config(settings: dict) -> DBConfig:
    return DBConfig(
        host=str(settings.get("host", "localhost")),
        port=int(settings.get("port", 3306)),
        user=str(settings.get("user", "root")),
        password=str(settings.get("password", "")),
        database=str(settings.get("database", DEFAULT_DATABASE)),
    )


@contextmanager
def _server(config: DBConfig, *, select_db: bool = True) -> Iterator:
    params = {"host": config.host, "port": config.port, "user": config.user, "password": config.password}
    if select_db:
        params["database"] = config.database
    with closing(mysql.connector.connect(**params)) as conn:
        yield conn
        conn.commit()


def split_statements(sql: str) -> list[str]:
    """Split a schema/seed script into statements.

    Comment lines and CREATE DATABASE / USE statements are dropped so the
    script runs against whatever database the settings name. Statements
    must not contain ';' inside string literals.
    """
    sql = _DB_SWITCH.sub("", _COMMENT_LINE.sub("", sql))
    return [s.strip() for s in sql.split(";") if s.strip()]


def run_script(settings: dict, path: str | Path) -> int:
    statements = split_statements(Path(path).read_text(encoding="utf-8"))
    with _server(_db_config(settings)) as conn:
        cur = conn.cursor()
        for statement in statements:
            cur.execute(statement)
    logger.info("Executed %d statements from %s", len(statements), path)
    return len(statements)


def ensure_database_exists(settings: dict) -> None:
    config = _db_config(settings)
    with _server(config, select_db=False) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(settings: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(settings)
    run_script(settings, schema_path)


def apply_seed_sql(settings: dict, *, seed_path: str | Path) -> None:
    run_script(settings, seed_path)


def ensure_demo_users(settings: dict) -> list[str]:
    """Create the demo accounts, or reset their password and role.

    Returns the demo usernames.
    """
    with _server(_db_config(settings)) as conn:
        cur = conn.cursor()
        for username, password, role, first_name, last_name in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users (username, password_hash, role, first_name, last_name)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE password_hash = VALUES(password_hash), role = VALUES(role)
                """,
                (username, generate_password_hash(password), role, first_name, last_name),
            )
            logger.info("Demo user ready: %s (%s)", username, role)
    return [username for username, *_ in DEMO_USERS]


def list_tables(settings: dict) -> list[str]:
    with _server(_db_config(settings)) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
