from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import normalize_date, parse_iso_date
from ..common.validators import coerce_point, optional_id, require_id
from ..core.enums import EvaluationType
from ..core.exceptions import ValidationError


def _parse_content(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Nội dung đánh giá phải là chuỗi")
    return value


def _parse_type(value: Any) -> Optional[EvaluationType]:
    if value is None or value == "":
        return None
    if isinstance(value, EvaluationType):
        return value
    try:
        return EvaluationType(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Loại đánh giá không hợp lệ")


@dataclass(frozen=True)
class EvaluationDraft:
    """Bản nháp đánh giá đang chờ gửi (chưa có id).

    Draft có thể thiếu trường; `validated()` kiểm tra trước khi gửi đi.
    """

    student_id: Optional[int] = None
    class_id: Optional[int] = None
    type: Optional[EvaluationType] = None
    study_point: int = 0
    discipline_point: int = 0
    content: Optional[str] = None
    event_date: Optional[date] = None

    def validated(self) -> "EvaluationDraft":
        if not self.class_id:
            raise ValidationError("Vui lòng chọn Lớp")
        if not self.student_id:
            raise ValidationError("Vui lòng chọn Học sinh")
        if not self.type:
            raise ValidationError("Vui lòng chọn Loại đánh giá")

        content = (_parse_content(self.content) or "").strip() or None
        return replace(
            self,
            student_id=require_id(self.student_id, "Học sinh"),
            class_id=require_id(self.class_id, "Lớp"),
            type=_parse_type(self.type),
            study_point=coerce_point(self.study_point, "Điểm học tập"),
            discipline_point=coerce_point(self.discipline_point, "Điểm kỷ luật"),
            content=content,
        )

    def to_payload(self) -> dict:
        payload = {
            "student_id": self.student_id,
            "class_id": self.class_id,
            "type": self.type.value if self.type else None,
            "study_point": self.study_point,
            "discipline_point": self.discipline_point,
            "content": self.content,
        }
        if self.event_date:
            payload["date"] = self.event_date.isoformat()
        return payload

    @classmethod
    def from_payload(cls, data: dict) -> "EvaluationDraft":
        raw_date = data.get("date")
        event_date = None
        if raw_date:
            normalized = normalize_date(raw_date)
            if not normalized:
                raise ValidationError("Ngày không hợp lệ (YYYY-MM-DD)")
            event_date = parse_iso_date(normalized)

        return cls(
            student_id=optional_id(data.get("student_id"), "Học sinh"),
            class_id=optional_id(data.get("class_id"), "Lớp"),
            type=_parse_type(data.get("type")),
            study_point=coerce_point(data.get("study_point"), "Điểm học tập"),
            discipline_point=coerce_point(data.get("discipline_point"), "Điểm kỷ luật"),
            content=_parse_content(data.get("content")),
            event_date=event_date,
        )


@dataclass(frozen=True)
class EvaluationRecord:
    """Thực thể miền (domain): một bản ghi trong sổ đánh giá.

    Không bao giờ bị sửa sau khi tạo; sửa sai = xóa rồi tạo lại.
    `event_date` giữ nguyên giá trị thô nếu không phân tích được ngày.
    """

    evaluation_id: int
    student_id: int
    class_id: int
    teacher_id: int
    type: EvaluationType
    study_point: int
    discipline_point: int
    content: Optional[str]
    event_date: date | str | None

    # display fields (read-model joins)
    student: Optional[str] = None
    teacher: Optional[str] = None
    class_name: Optional[str] = None

    def to_dict(self) -> dict:
        if isinstance(self.event_date, date):
            day = self.event_date.isoformat()
        else:
            day = self.event_date
        return {
            "id": self.evaluation_id,
            "student_id": self.student_id,
            "class_id": self.class_id,
            "teacher_id": self.teacher_id,
            "type": self.type.value,
            "study_point": self.study_point,
            "discipline_point": self.discipline_point,
            "content": self.content,
            "date": day,
            "student": self.student,
            "teacher": self.teacher,
            "class_name": self.class_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EvaluationRecord":
        raw_date = data.get("date")
        normalized = normalize_date(raw_date)
        return cls(
            evaluation_id=int(data["id"]),
            student_id=int(data["student_id"]),
            class_id=int(data["class_id"]),
            teacher_id=int(data["teacher_id"]),
            type=EvaluationType(data["type"]),
            study_point=int(data.get("study_point") or 0),
            discipline_point=int(data.get("discipline_point") or 0),
            content=data.get("content"),
            event_date=parse_iso_date(normalized) if normalized else raw_date,
            student=data.get("student"),
            teacher=data.get("teacher"),
            class_name=data.get("class_name"),
        )


@dataclass(frozen=True)
class ScoreSummary:
    """Điểm tổng (dẫn xuất, không lưu) cho một phạm vi: cả năm hoặc một lớp."""

    final_study_point: int
    final_discipline_point: int
    study_plus_count: int = 0
    study_minus_count: int = 0
    discipline_plus_count: int = 0
    discipline_minus_count: int = 0
    student_id: Optional[int] = None
    class_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "class_id": self.class_id,
            "final_study_point": self.final_study_point,
            "final_discipline_point": self.final_discipline_point,
            "study_plus_count": self.study_plus_count,
            "study_minus_count": self.study_minus_count,
            "discipline_plus_count": self.discipline_plus_count,
            "discipline_minus_count": self.discipline_minus_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScoreSummary":
        def _opt(key: str) -> Optional[int]:
            v = data.get(key)
            return int(v) if v is not None else None

        return cls(
            final_study_point=int(data["final_study_point"]),
            final_discipline_point=int(data["final_discipline_point"]),
            study_plus_count=int(data.get("study_plus_count") or 0),
            study_minus_count=int(data.get("study_minus_count") or 0),
            discipline_plus_count=int(data.get("discipline_plus_count") or 0),
            discipline_minus_count=int(data.get("discipline_minus_count") or 0),
            student_id=_opt("student_id"),
            class_id=_opt("class_id"),
        )
