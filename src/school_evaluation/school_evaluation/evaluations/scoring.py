from __future__ import annotations

from typing import Iterable, Optional

from ..core.constants import BASELINE_POINT
from .model import EvaluationRecord, ScoreSummary


def summarize(
    records: Iterable[EvaluationRecord],
    *,
    student_id: Optional[int] = None,
    class_id: Optional[int] = None,
) -> ScoreSummary:
    """Fold a ledger slice into a ScoreSummary.

    Finals are BASELINE_POINT plus the plain sum of deltas. The caller picks the
    slice (one student, or one student within one class); `student_id` and
    `class_id` only label the result.
    """

    study = 0
    discipline = 0
    study_plus = study_minus = 0
    discipline_plus = discipline_minus = 0

    for r in records:
        study += r.study_point
        discipline += r.discipline_point

        if r.study_point > 0:
            study_plus += 1
        elif r.study_point < 0:
            study_minus += 1

        if r.discipline_point > 0:
            discipline_plus += 1
        elif r.discipline_point < 0:
            discipline_minus += 1

    return ScoreSummary(
        final_study_point=BASELINE_POINT + study,
        final_discipline_point=BASELINE_POINT + discipline,
        study_plus_count=study_plus,
        study_minus_count=study_minus,
        discipline_plus_count=discipline_plus,
        discipline_minus_count=discipline_minus,
        student_id=student_id,
        class_id=class_id,
    )
