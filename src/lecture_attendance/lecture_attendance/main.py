from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api.faculty_controller import register as register_faculty
from .api.student_controller import register as register_students
from .container import Container, build_container
from .core.constants import LOW_ATTENDANCE_THRESHOLD, MAX_LECTURE_SLOTS
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    When ``container`` is given (tests), settings-driven DB bootstrap is skipped.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

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
        logger.info("settings=%s", settings_module)

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            low_threshold=int(getattr(settings, "LOW_ATTENDANCE_THRESHOLD", LOW_ATTENDANCE_THRESHOLD)),
            max_lecture_slots=int(getattr(settings, "MAX_LECTURE_SLOTS", MAX_LECTURE_SLOTS)),
        )

    directory_cache = container.directory_cache

    @app.before_request
    def refresh_directory():
        directory_cache.invalidate()

    register_faculty(app, container)
    register_students(app, container)

    return app
