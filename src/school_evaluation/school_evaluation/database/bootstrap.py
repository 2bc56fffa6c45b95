from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from .connection import DBConfig, DatabaseConnection


def _connect(db_config: dict, *, with_database: bool = True):
    return DatabaseConnection(DBConfig.from_dict(db_config)).connect(with_database=with_database)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch in ("'", '"'):
            if not quote:
                quote = ch
            elif quote == ch:
                quote = ""
            buf.append(ch)
            continue

        if ch == ";" and not quote:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> None:
    sql = Path(path).read_text(encoding="utf-8")
    sql = _strip_line_comments(_strip_create_db_and_use(sql))

    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    database = DBConfig.from_dict(db_config).database
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Idempotently create one account per role plus a class linking them."""

    conn = _connect(db_config)
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_user(full_name: str, username: str, roles: tuple[str, ...]) -> int:
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            existing = cur.fetchone()
            if existing:
                user_id = int(existing["user_id"])
                cur.execute("UPDATE users SET full_name=%s WHERE user_id=%s", (full_name, user_id))
            else:
                cur.execute("INSERT INTO users (full_name, username) VALUES (%s, %s)", (full_name, username))
                user_id = int(cur.lastrowid)

            for role in roles:
                cur.execute("INSERT IGNORE INTO user_roles (user_id, role) VALUES (%s, %s)", (user_id, role))
            return user_id

        upsert_user("Quản lý Demo", "manager", ("manager",))
        teacher_id = upsert_user("Trần Thị Giáo", "teacher", ("teacher",))
        student_id = upsert_user("Nguyễn Văn A", "student", ("student",))
        parent_id = upsert_user("Nguyễn Văn Bố", "parent", ("parent",))

        cur.execute("SELECT class_id FROM classes WHERE class_name=%s", ("Toán 10A",))
        row = cur.fetchone()
        if row:
            class_id = int(row["class_id"])
            cur.execute("UPDATE classes SET teacher_user_id=%s WHERE class_id=%s", (teacher_id, class_id))
        else:
            cur.execute(
                "INSERT INTO classes (class_name, subject, teacher_user_id) VALUES (%s, %s, %s)",
                ("Toán 10A", "Toán", teacher_id),
            )
            class_id = int(cur.lastrowid)

        cur.execute(
            "INSERT IGNORE INTO class_students (class_id, student_user_id) VALUES (%s, %s)",
            (class_id, student_id),
        )
        cur.execute(
            "INSERT IGNORE INTO parent_students (parent_user_id, student_user_id) VALUES (%s, %s)",
            (parent_id, student_id),
        )

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
