from __future__ import annotations

from datetime import date

import pytest

from src.school_evaluation.school_evaluation.core.enums import EvaluationType
from src.school_evaluation.school_evaluation.core.exceptions import ValidationError
from src.school_evaluation.school_evaluation.evaluations.model import (
    EvaluationDraft,
    EvaluationRecord,
    ScoreSummary,
)


def test_draft_requires_class_then_student_then_type():
    with pytest.raises(ValidationError, match="Lớp"):
        EvaluationDraft(student_id=3, type=EvaluationType.STUDY).validated()
    with pytest.raises(ValidationError, match="Học sinh"):
        EvaluationDraft(class_id=1, type=EvaluationType.STUDY).validated()
    with pytest.raises(ValidationError, match="Loại đánh giá"):
        EvaluationDraft(class_id=1, student_id=3).validated()


def test_draft_allows_both_points_zero_and_blank_content():
    d = EvaluationDraft(student_id=3, class_id=1, type=EvaluationType.DISCIPLINE, content="   ").validated()
    assert (d.study_point, d.discipline_point) == (0, 0)
    assert d.content is None


def test_from_payload_coerces_points_and_date():
    d = EvaluationDraft.from_payload(
        {"student_id": "3", "class_id": 1, "type": "Study", "study_point": "-2", "date": "15/09/2024"}
    )
    assert d.student_id == 3
    assert d.type is EvaluationType.STUDY
    assert d.study_point == -2
    assert d.discipline_point == 0
    assert d.event_date == date(2024, 9, 15)


@pytest.mark.parametrize(
    "payload",
    [
        {"study_point": "abc"},
        {"study_point": 1.5},
        {"discipline_point": True},
        {"type": "homework"},
        {"date": "31/02/2024"},
    ],
)
def test_from_payload_rejects_bad_values(payload):
    with pytest.raises(ValidationError):
        EvaluationDraft.from_payload({"student_id": 3, "class_id": 1, "type": "study", **payload})


def test_payload_never_carries_teacher():
    d = EvaluationDraft(student_id=3, class_id=1, type=EvaluationType.STUDY, study_point=2)
    payload = d.to_payload()
    assert "teacher_id" not in payload
    assert "date" not in payload
    assert payload["type"] == "study"


def test_record_keeps_unparseable_date_raw():
    r = EvaluationRecord.from_dict(
        {"id": 9, "student_id": 3, "class_id": 1, "teacher_id": 2, "type": "discipline", "date": "n/a"}
    )
    assert r.event_date == "n/a"
    assert r.study_point == 0
    assert r.to_dict()["date"] == "n/a"


def test_record_dict_shape():
    r = EvaluationRecord.from_dict(
        {
            "id": 9,
            "student_id": 3,
            "class_id": 1,
            "teacher_id": 2,
            "type": "study",
            "study_point": 2,
            "discipline_point": 0,
            "date": "2024-09-15",
            "student": "Học sinh Demo",
        }
    )
    assert r.event_date == date(2024, 9, 15)
    data = r.to_dict()
    assert data["id"] == 9
    assert data["date"] == "2024-09-15"
    assert data["student"] == "Học sinh Demo"


def test_summary_from_dict_defaults_counts():
    s = ScoreSummary.from_dict({"final_study_point": 104, "final_discipline_point": "98", "student_id": 3})
    assert s.final_discipline_point == 98
    assert s.study_plus_count == 0
    assert s.class_id is None


@pytest.mark.parametrize("content", [123, ["a"], {"text": "a"}])
def test_non_text_content_is_rejected(content):
    with pytest.raises(ValidationError):
        EvaluationDraft.from_payload({"student_id": 3, "class_id": 1, "type": "study", "content": content})
    with pytest.raises(ValidationError):
        EvaluationDraft(student_id=3, class_id=1, type=EvaluationType.STUDY, content=content).validated()
