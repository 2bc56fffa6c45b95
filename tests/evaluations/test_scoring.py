from __future__ import annotations

from src.school_evaluation.school_evaluation.core.constants import BASELINE_POINT
from src.school_evaluation.school_evaluation.evaluations.scoring import summarize


def test_empty_ledger_is_baseline():
    s = summarize([])
    assert s.final_study_point == BASELINE_POINT == 100
    assert s.final_discipline_point == 100
    assert (s.study_plus_count, s.study_minus_count) == (0, 0)


def test_finals_are_baseline_plus_sum(make_record):
    records = [
        make_record(1, study_point=2),
        make_record(2, study_point=-1, discipline_point=-2),
        make_record(3, study_point=3),
    ]
    s = summarize(records, student_id=3)
    assert s.final_study_point == 104
    assert s.final_discipline_point == 98
    assert s.student_id == 3
    assert s.class_id is None


def test_scores_are_not_clamped(make_record):
    records = [make_record(i, discipline_point=-30) for i in range(1, 5)]
    assert summarize(records).final_discipline_point == -20

    records = [make_record(i, study_point=50) for i in range(1, 4)]
    assert summarize(records).final_study_point == 250


def test_counts_ignore_zero_deltas(make_record):
    records = [
        make_record(1, study_point=2, discipline_point=0),
        make_record(2, study_point=0, discipline_point=-2),
        make_record(3, study_point=-2, discipline_point=-2),
        make_record(4, study_point=0, discipline_point=1),
    ]
    s = summarize(records)
    assert (s.study_plus_count, s.study_minus_count) == (1, 1)
    assert (s.discipline_plus_count, s.discipline_minus_count) == (1, 2)


def test_summary_is_order_independent(make_record):
    records = [make_record(1, study_point=5), make_record(2, study_point=-7), make_record(3, discipline_point=4)]
    assert summarize(records) == summarize(list(reversed(records)))
