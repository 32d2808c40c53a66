from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import DataAccessError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

DUPLICATE_KEY_ERRNO = 1062


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``.

    Outside a transaction the connection is private to this block and
    committed on exit. Inside one, commit/rollback is left to the owner.
    Driver errors surface as ``DataAccessError``.
    """

    shared = conn_factory.active
    try:
        conn = shared if shared is not None else conn_factory.connect()
    except mysql.connector.Error as e:
        logger.exception("Could not open database connection")
        raise DataAccessError("Database unavailable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            if shared is None:
                conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        if shared is None:
            conn.rollback()
        logger.exception("Database operation failed")
        raise DataAccessError("Database operation failed") from e
    except Exception:
        if shared is None:
            conn.rollback()
        raise
    finally:
        if shared is None:
            conn.close()


def is_duplicate_key(error: mysql.connector.Error) -> bool:
    return getattr(error, "errno", None) == DUPLICATE_KEY_ERRNO


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
