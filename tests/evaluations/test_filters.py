from __future__ import annotations

from datetime import date

from src.school_evaluation.school_evaluation.core.enums import EvaluationType
from src.school_evaluation.school_evaluation.evaluations.filters import EvaluationCriteria, filter_evaluations


def _ledger(make_record):
    return [
        make_record(1, student="Nguyễn Văn A", teacher="Cô Lan", type=EvaluationType.STUDY),
        make_record(2, student="Trần Thị B", teacher="Thầy Hùng", type=EvaluationType.DISCIPLINE),
        make_record(3, student="Lê Văn C", teacher="Cô Lan", event_date=date(2024, 10, 1)),
    ]


def test_empty_criteria_returns_everything(make_record):
    records = _ledger(make_record)
    assert filter_evaluations(records) == records
    assert filter_evaluations(records, EvaluationCriteria()) == records


def test_search_is_case_insensitive_over_names_and_type(make_record):
    records = _ledger(make_record)

    got = filter_evaluations(records, EvaluationCriteria(search="lan"))
    assert [r.evaluation_id for r in got] == [1, 3]

    got = filter_evaluations(records, EvaluationCriteria(search="DISCIP"))
    assert [r.evaluation_id for r in got] == [2]


def test_exact_student_and_type_combine(make_record):
    records = _ledger(make_record)
    criteria = EvaluationCriteria(teacher="Cô Lan", type="study")
    assert [r.evaluation_id for r in filter_evaluations(records, criteria)] == [1, 3]

    criteria = EvaluationCriteria(student="Nguyễn Văn", type="study")
    assert filter_evaluations(records, criteria) == []


def test_date_matches_calendar_day_in_any_format(make_record):
    records = _ledger(make_record)
    for value in ("2024-10-01", "01/10/2024", "2024-10-01T08:30:00Z"):
        got = filter_evaluations(records, EvaluationCriteria(date=value))
        assert [r.evaluation_id for r in got] == [3]


def test_unparseable_dates_never_match(make_record):
    records = _ledger(make_record) + [make_record(4, event_date="không rõ")]
    assert filter_evaluations(records, EvaluationCriteria(date="2024-13-45")) == []

    got = filter_evaluations(records, EvaluationCriteria(date="2024-09-15"))
    assert 4 not in [r.evaluation_id for r in got]


def test_criteria_from_query_args():
    c = EvaluationCriteria.from_mapping({"search": "  lan ", "date": "2024-09-15"})
    assert c.search == "lan"
    assert c.date == "2024-09-15"
    assert not c.is_empty()
    assert EvaluationCriteria.from_mapping({}).is_empty()


def test_offset_timestamps_compare_on_utc_day(make_record):
    records = [make_record(1, event_date=date(2024, 3, 6)), make_record(2, event_date=date(2024, 3, 5))]

    got = filter_evaluations(records, EvaluationCriteria(date="2024-03-05T23:30:00-05:00"))
    assert [r.evaluation_id for r in got] == [1]
