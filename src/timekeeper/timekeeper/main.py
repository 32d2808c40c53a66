from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .adjustments.controller import register as register_adjustments
from .attendance.controller import register as register_attendance
from .leaves.controller import register as register_leaves
from .stats.controller import register as register_stats
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)
    # Keep dict insertion order in responses (e.g. "Week 9" before "Week 10").
    app.json.sort_keys = False

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            logger.info("demo seed ready (users=%s)", ", ".join(ensure_demo_users(db_config)))

        container = build_container(
            db_config=db_config,
            monthly_quota=int(getattr(settings, "MONTHLY_LEAVE_QUOTA", 3)),
            week_first_day=int(getattr(settings, "WEEK_FIRST_DAY", 6)),
            week_min_days=int(getattr(settings, "WEEK_MIN_DAYS", 1)),
        )

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_stats(app, container)
    register_adjustments(app, container)
    register_leaves(app, container)

    return app
