"""Tạo database (nếu chưa có) và áp dụng database/schema.sql."""
from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import load_settings

from src.school_evaluation.school_evaluation.database.bootstrap import apply_schema, list_tables


def main() -> None:
    db_config = dict(load_settings().DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    print(f"OK: schema.sql -> {db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}")
    print("Tables: " + ", ".join(tables))


if __name__ == "__main__":
    main()
