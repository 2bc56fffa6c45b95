from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import EvaluationType
from .model import EvaluationRecord


class EvaluationRepository(Protocol):
    """Giao diện repository cho sổ đánh giá.

    Chỉ có thêm / đọc / xóa: không có thao tác cập nhật từng trường.
    """

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
        """Insert one ledger entry. Returns evaluation_id."""

        raise NotImplementedError

    def get(self, evaluation_id: int) -> Optional[EvaluationRecord]:
        raise NotImplementedError

    def list(
        self,
        *,
        student_ids: Optional[Sequence[int]] = None,
        class_id: Optional[int] = None,
        teacher_id: Optional[int] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[EvaluationRecord]:
        """List entries joined with display names, newest first.

        `student_ids=None` means no student restriction; an empty sequence matches nothing.
        `limit=None` returns every matching row.
        """

        raise NotImplementedError

    def delete(self, evaluation_id: int) -> bool:
        raise NotImplementedError
