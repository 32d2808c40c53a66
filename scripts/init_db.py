"""Create the configured database (if missing) and apply database/schema.sql.

Settings come from APP_ENV (see config/). Safe to re-run: every table is
created with IF NOT EXISTS.

    APP_ENV=development python scripts/init_db.py
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timekeeper.timekeeper.database.bootstrap import apply_schema, list_tables

logger = logging.getLogger("timekeeper.init_db")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings_module = get_settings_module()
    db_config = dict(importlib.import_module(settings_module).DB_CONFIG)
    logger.info("settings=%s target=%s@%s/%s", settings_module, db_config.get("user"), db_config.get("host"), db_config.get("database"))

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    logger.info("schema ready (tables=%d): %s", len(tables), ", ".join(sorted(tables)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
