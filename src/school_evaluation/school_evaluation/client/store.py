from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence, TypeVar

from ..common.validators import require_id, require_page
from ..core.constants import DEFAULT_LIMIT, DEFAULT_SKIP, GENERIC_ERROR_MESSAGE
from ..core.exceptions import TransportError, ValidationError
from ..evaluations.model import EvaluationDraft, EvaluationRecord, ScoreSummary
from .api import ApiClient

T = TypeVar("T")


class EvaluationStore(Protocol):
    """Ledger operations as seen by a dashboard: create / list / delete, plus summaries."""

    def create(self, draft: EvaluationDraft) -> EvaluationRecord:
        raise NotImplementedError

    def get(self, evaluation_id: int) -> EvaluationRecord:
        raise NotImplementedError

    def list(
        self,
        *,
        student_id: Optional[int] = None,
        class_id: Optional[int] = None,
        skip: int = DEFAULT_SKIP,
        limit: int = DEFAULT_LIMIT,
    ) -> Sequence[EvaluationRecord]:
        raise NotImplementedError

    def delete(self, evaluation_id: int) -> None:
        raise NotImplementedError

    def summary(self, *, student_id: int, class_id: Optional[int] = None) -> ScoreSummary:
        raise NotImplementedError


def _decode(parse: Callable[[Any], T], body: Any) -> T:
    try:
        return parse(body)
    except (KeyError, TypeError, ValueError) as e:
        raise TransportError(GENERIC_ERROR_MESSAGE) from e


class HttpEvaluationStore(EvaluationStore):
    """EvaluationStore backed by the REST API.

    Local validation runs before any request is sent.
    """

    def __init__(self, api: ApiClient):
        self._api = api

    def create(self, draft: EvaluationDraft) -> EvaluationRecord:
        draft = draft.validated()
        body = self._api.post("/evaluations", json=draft.to_payload())
        return _decode(EvaluationRecord.from_dict, body)

    def get(self, evaluation_id: int) -> EvaluationRecord:
        evaluation_id = require_id(evaluation_id, "Đánh giá")
        return _decode(EvaluationRecord.from_dict, self._api.get(f"/evaluations/{evaluation_id}"))

    def list(
        self,
        *,
        student_id: Optional[int] = None,
        class_id: Optional[int] = None,
        skip: int = DEFAULT_SKIP,
        limit: int = DEFAULT_LIMIT,
    ) -> Sequence[EvaluationRecord]:
        skip, limit = require_page(skip, limit)
        if class_id is not None and student_id is None:
            raise ValidationError("Vui lòng chọn Học sinh trước khi lọc theo lớp")

        if student_id is None:
            path = "/evaluations"
        elif class_id is None:
            path = f"/evaluations/student/{require_id(student_id, 'Học sinh')}"
        else:
            path = f"/evaluations/student/{require_id(student_id, 'Học sinh')}/class/{require_id(class_id, 'Lớp')}"

        body = self._api.get(path, params={"skip": skip, "limit": limit})
        return _decode(lambda rows: [EvaluationRecord.from_dict(r) for r in rows], body)

    def list_for_teacher(
        self,
        teacher_id: int,
        *,
        skip: int = DEFAULT_SKIP,
        limit: int = DEFAULT_LIMIT,
    ) -> Sequence[EvaluationRecord]:
        skip, limit = require_page(skip, limit)
        teacher_id = require_id(teacher_id, "Giáo viên")
        body = self._api.get(f"/evaluations/teacher/{teacher_id}", params={"skip": skip, "limit": limit})
        return _decode(lambda rows: [EvaluationRecord.from_dict(r) for r in rows], body)

    def delete(self, evaluation_id: int) -> None:
        evaluation_id = require_id(evaluation_id, "Đánh giá")
        self._api.delete(f"/evaluations/{evaluation_id}")

    def summary(self, *, student_id: int, class_id: Optional[int] = None) -> ScoreSummary:
        student_id = require_id(student_id, "Học sinh")
        if class_id is None:
            path = f"/evaluations/student/{student_id}/summary"
        else:
            path = f"/evaluations/student/{student_id}/class/{require_id(class_id, 'Lớp')}/summary"
        return _decode(ScoreSummary.from_dict, self._api.get(path))
