from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import EvaluationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import EvaluationRecord
from .repository import EvaluationRepository

_SELECT = """
    SELECT
        e.evaluation_id,
        e.student_user_id,
        e.class_id,
        e.teacher_user_id,
        e.evaluation_type,
        e.study_point,
        e.discipline_point,
        e.evaluation_content,
        e.evaluation_date,
        st.full_name AS student_name,
        te.full_name AS teacher_name,
        c.class_name
    FROM evaluations e
    LEFT JOIN users st ON st.user_id = e.student_user_id
    LEFT JOIN users te ON te.user_id = e.teacher_user_id
    LEFT JOIN classes c ON c.class_id = e.class_id
"""


def _to_record(r: dict) -> EvaluationRecord:
    return EvaluationRecord(
        evaluation_id=int(r["evaluation_id"]),
        student_id=int(r["student_user_id"]),
        class_id=int(r["class_id"]),
        teacher_id=int(r["teacher_user_id"]),
        type=EvaluationType(r["evaluation_type"]),
        study_point=int(r["study_point"] or 0),
        discipline_point=int(r["discipline_point"] or 0),
        content=r.get("evaluation_content"),
        event_date=r["evaluation_date"],
        student=r.get("student_name"),
        teacher=r.get("teacher_name"),
        class_name=r.get("class_name"),
    )


class MySQLEvaluationRepository(EvaluationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        student_id: int,
        class_id: int,
        teacher_id: int,
        evaluation_type: EvaluationType,
        study_point: int,
        discipline_point: int,
        content: Optional[str],
        event_date: date,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO evaluations(
                    student_user_id, class_id, teacher_user_id, evaluation_type,
                    study_point, discipline_point, evaluation_content, evaluation_date
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(student_id),
                    int(class_id),
                    int(teacher_id),
                    evaluation_type.value,
                    int(study_point),
                    int(discipline_point),
                    content,
                    event_date,
                ),
            )
            return int(cur.lastrowid)

    def get(self, evaluation_id: int) -> Optional[EvaluationRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.evaluation_id=%s", (int(evaluation_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list(
        self,
        *,
        student_ids: Optional[Sequence[int]] = None,
        class_id: Optional[int] = None,
        teacher_id: Optional[int] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[EvaluationRecord]:
        if student_ids is not None and not student_ids:
            return []

        clauses: list[str] = []
        params: list[object] = []
        if student_ids is not None:
            clauses.append(f"e.student_user_id IN ({in_clause(student_ids)})")
            params.extend(int(s) for s in student_ids)
        if class_id is not None:
            clauses.append("e.class_id=%s")
            params.append(int(class_id))
        if teacher_id is not None:
            clauses.append("e.teacher_user_id=%s")
            params.append(int(teacher_id))

        sql = _SELECT
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY e.evaluation_date DESC, e.evaluation_id DESC"
        if limit is not None:
            sql += " LIMIT %s OFFSET %s"
            params.extend([int(limit), int(skip)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def delete(self, evaluation_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM evaluations WHERE evaluation_id=%s", (int(evaluation_id),))
            return cur.rowcount > 0
