"""Load database/seed.sql and give the demo accounts real password hashes.

Run after scripts/init_db.py. Existing demo accounts get their password and
role reset; other users are left alone.
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

from src.timekeeper.timekeeper.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users

logger = logging.getLogger("timekeeper.seed_db")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    usernames = ensure_demo_users(db_config)

    logger.info("demo seed ready in %s: %d accounts", db_config.get("database"), len(usernames))
    for username, password, role, *_ in DEMO_USERS:
        logger.info("  %-10s %-8s password=%s", username, role, password)
    return 0


if __name__ == "__main__":
    sys.exit(main())
