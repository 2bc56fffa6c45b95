from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import normalize_date
from .model import EvaluationRecord


@dataclass(frozen=True)
class EvaluationCriteria:
    """Tiêu chí lọc danh sách đánh giá; mọi tiêu chí đều tùy chọn và kết hợp AND."""

    search: str = ""
    student: str = ""
    teacher: str = ""
    type: str = ""
    date: str = ""

    def is_empty(self) -> bool:
        return not (self.search or self.student or self.teacher or self.type or self.date)

    @classmethod
    def from_mapping(cls, args: Mapping[str, str]) -> "EvaluationCriteria":
        return cls(
            search=(args.get("search") or "").strip(),
            student=args.get("student") or "",
            teacher=args.get("teacher") or "",
            type=args.get("type") or "",
            date=(args.get("date") or "").strip(),
        )


def _type_label(record: EvaluationRecord) -> str:
    return record.type.value if record.type else ""


def matches(record: EvaluationRecord, criteria: EvaluationCriteria) -> bool:
    if criteria.search:
        needle = criteria.search.lower()
        haystacks = (record.student or "", record.teacher or "", _type_label(record))
        if not any(needle in h.lower() for h in haystacks):
            return False

    if criteria.student and record.student != criteria.student:
        return False
    if criteria.teacher and record.teacher != criteria.teacher:
        return False
    if criteria.type and _type_label(record) != getattr(criteria.type, "value", criteria.type):
        return False

    if criteria.date:
        wanted = normalize_date(criteria.date)
        got = normalize_date(record.event_date)
        # unparseable on either side never matches
        if wanted is None or got is None or wanted != got:
            return False

    return True


def filter_evaluations(
    records: Iterable[EvaluationRecord],
    criteria: Optional[EvaluationCriteria] = None,
) -> list[EvaluationRecord]:
    items = list(records)
    if criteria is None or criteria.is_empty():
        return items
    return [r for r in items if matches(r, criteria)]
