from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.lecture_attendance.lecture_attendance.database.bootstrap import apply_schema, list_tables
from src.lecture_attendance.lecture_attendance.database.connection import DBConfig

logger = logging.getLogger("init_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    logger.info("Schema ready -> %s (tables=%d)", DBConfig.from_dict(db_config).describe(), len(tables))


if __name__ == "__main__":
    main()
