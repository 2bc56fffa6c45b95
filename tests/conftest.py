from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

import pytest

from src.school_evaluation.school_evaluation.access.identity import Identity
from src.school_evaluation.school_evaluation.container import build_container
from src.school_evaluation.school_evaluation.core.enums import EvaluationType, Role
from src.school_evaluation.school_evaluation.evaluations.model import EvaluationRecord
from src.school_evaluation.school_evaluation.evaluations.service import EvaluationService

# Roster used across tests:
#   class 1 "Toán 10A": teacher 2, students 3 and 4
#   class 2 "Văn 10A":  teacher 5, student 3
#   parent 6 -> child 3; user 1 is the manager
MANAGER_ID = 1
TEACHER_ID = 2
STUDENT_ID = 3
OTHER_STUDENT_ID = 4
OTHER_TEACHER_ID = 5
PARENT_ID = 6

NAMES = {
    MANAGER_ID: "Quản lý Demo",
    TEACHER_ID: "Giáo viên Demo",
    STUDENT_ID: "Học sinh Demo",
    OTHER_STUDENT_ID: "Trần Văn B",
    OTHER_TEACHER_ID: "Lê Thị C",
    PARENT_ID: "Phụ huynh Demo",
}
CLASS_NAMES = {1: "Toán 10A", 2: "Văn 10A"}


class InMemoryEvaluations:
    def __init__(self):
        self._rows: dict[int, EvaluationRecord] = {}
        self._id = 0

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
        self._id += 1
        self._rows[self._id] = EvaluationRecord(
            evaluation_id=self._id,
            student_id=student_id,
            class_id=class_id,
            teacher_id=teacher_id,
            type=evaluation_type,
            study_point=study_point,
            discipline_point=discipline_point,
            content=content,
            event_date=event_date,
            student=NAMES.get(student_id),
            teacher=NAMES.get(teacher_id),
            class_name=CLASS_NAMES.get(class_id),
        )
        return self._id

    def get(self, evaluation_id: int) -> Optional[EvaluationRecord]:
        return self._rows.get(evaluation_id)

    def list(
        self,
        *,
        student_ids: Optional[Sequence[int]] = None,
        class_id: Optional[int] = None,
        teacher_id: Optional[int] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> list[EvaluationRecord]:
        items = list(self._rows.values())
        if student_ids is not None:
            wanted = set(student_ids)
            items = [r for r in items if r.student_id in wanted]
        if class_id is not None:
            items = [r for r in items if r.class_id == class_id]
        if teacher_id is not None:
            items = [r for r in items if r.teacher_id == teacher_id]
        items.sort(key=lambda r: (r.event_date, r.evaluation_id), reverse=True)
        items = items[skip:]
        return items if limit is None else items[:limit]

    def delete(self, evaluation_id: int) -> bool:
        return self._rows.pop(evaluation_id, None) is not None


class InMemoryRoster:
    def __init__(self):
        self.classes = {
            1: (TEACHER_ID, {STUDENT_ID, OTHER_STUDENT_ID}),
            2: (OTHER_TEACHER_ID, {STUDENT_ID}),
        }
        self.children = {PARENT_ID: {STUDENT_ID}}

    def class_has_student(self, *, class_id: int, student_id: int) -> bool:
        entry = self.classes.get(class_id)
        return bool(entry) and student_id in entry[1]

    def teacher_teaches_class(self, *, teacher_id: int, class_id: int) -> bool:
        entry = self.classes.get(class_id)
        return bool(entry) and entry[0] == teacher_id

    def children_of(self, *, parent_id: int) -> list[int]:
        return sorted(self.children.get(parent_id, set()))


@pytest.fixture
def make_record():
    def _make(evaluation_id: int = 1, **overrides) -> EvaluationRecord:
        record = EvaluationRecord(
            evaluation_id=evaluation_id,
            student_id=STUDENT_ID,
            class_id=1,
            teacher_id=TEACHER_ID,
            type=EvaluationType.STUDY,
            study_point=0,
            discipline_point=0,
            content=None,
            event_date=date(2024, 9, 15),
            student=NAMES[STUDENT_ID],
            teacher=NAMES[TEACHER_ID],
            class_name=CLASS_NAMES[1],
        )
        return replace(record, **overrides)

    return _make


@pytest.fixture
def evaluations_repo():
    return InMemoryEvaluations()


@pytest.fixture
def roster():
    return InMemoryRoster()


@pytest.fixture
def service(evaluations_repo, roster):
    return EvaluationService(evaluations_repo, roster, clock=lambda: date(2024, 9, 15))


@pytest.fixture
def teacher():
    return Identity(user_id=TEACHER_ID, roles=frozenset({Role.TEACHER}))


@pytest.fixture
def other_teacher():
    return Identity(user_id=OTHER_TEACHER_ID, roles=frozenset({Role.TEACHER}))


@pytest.fixture
def student():
    return Identity(user_id=STUDENT_ID, roles=frozenset({Role.STUDENT}))


@pytest.fixture
def other_student():
    return Identity(user_id=OTHER_STUDENT_ID, roles=frozenset({Role.STUDENT}))


@pytest.fixture
def parent():
    return Identity(user_id=PARENT_ID, roles=frozenset({Role.PARENT}))


@pytest.fixture
def manager():
    return Identity(user_id=MANAGER_ID, roles=frozenset({Role.MANAGER}))


@pytest.fixture
def app(monkeypatch, evaluations_repo, roster):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.school_evaluation.school_evaluation.main import create_app

    container = build_container(evaluations_repo=evaluations_repo, roster_repo=roster)
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: int, roles) -> None:
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["roles"] = roles

    return _login
