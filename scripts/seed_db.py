"""Nạp dữ liệu demo: database/seed.sql + tài khoản manager/teacher/student/parent."""
from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import load_settings

from src.school_evaluation.school_evaluation.database.bootstrap import apply_seed_sql, ensure_demo_users


def main() -> None:
    db_config = dict(load_settings().DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)
    print(f"OK: seeded demo data -> {db_config.get('database')}")


if __name__ == "__main__":
    main()
