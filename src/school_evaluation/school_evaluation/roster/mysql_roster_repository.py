from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .repository import RosterProvider


class MySQLRosterRepository(RosterProvider):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def class_has_student(self, *, class_id: int, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS ok FROM class_students WHERE class_id=%s AND student_user_id=%s",
                (int(class_id), int(student_id)),
            )
            return fetchone(cur) is not None

    def teacher_teaches_class(self, *, teacher_id: int, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS ok FROM classes WHERE class_id=%s AND teacher_user_id=%s",
                (int(class_id), int(teacher_id)),
            )
            return fetchone(cur) is not None

    def children_of(self, *, parent_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT student_user_id FROM parent_students WHERE parent_user_id=%s ORDER BY student_user_id",
                (int(parent_id),),
            )
            return [int(r["student_user_id"]) for r in fetchall(cur)]
