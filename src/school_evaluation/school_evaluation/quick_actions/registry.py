from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Iterable, Optional, Protocol

from ..common.validators import coerce_point, require_non_empty
from ..core.enums import EvaluationType
from ..core.exceptions import NotFoundError, PreconditionError, ValidationError
from ..evaluations.model import EvaluationDraft, EvaluationRecord
from .model import DEFAULT_QUICK_ACTIONS, QuickActionTemplate

logger = logging.getLogger(__name__)


class DraftSink(Protocol):
    def create(self, draft: EvaluationDraft) -> EvaluationRecord:
        raise NotImplementedError


def _template_type(value) -> EvaluationType:
    if isinstance(value, EvaluationType):
        return value
    try:
        return EvaluationType(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Loại đánh giá không hợp lệ")


def new_template_id() -> str:
    return f"quick-{uuid.uuid4().hex[:12]}"


class QuickActionTemplateRegistry:
    """Ordered, session-local collection of quick-action templates.

    Templates are not persisted; `reset_to_defaults()` discards customizations.
    """

    def __init__(self, templates: Optional[Iterable[QuickActionTemplate]] = None):
        self._templates: list[QuickActionTemplate] = []
        if templates is None:
            self.reset_to_defaults()
        else:
            for t in templates:
                self._append(t)

    def _append(self, template: QuickActionTemplate) -> None:
        template = self._validate(template)
        if self._index_of(template.id) is not None:
            raise ValidationError(f"Mẫu '{template.id}' đã tồn tại")
        self._templates.append(template)

    @staticmethod
    def _validate(template: QuickActionTemplate) -> QuickActionTemplate:
        return replace(
            template,
            id=require_non_empty(template.id, "Mã mẫu"),
            name=require_non_empty(template.name, "Tên mẫu"),
            study_point=coerce_point(template.study_point, "Điểm học tập"),
            discipline_point=coerce_point(template.discipline_point, "Điểm kỷ luật"),
            type=_template_type(template.type),
        )

    def _index_of(self, template_id: str) -> Optional[int]:
        for i, t in enumerate(self._templates):
            if t.id == template_id:
                return i
        return None

    def list(self) -> list[QuickActionTemplate]:
        return list(self._templates)

    def get(self, template_id: str) -> QuickActionTemplate:
        idx = self._index_of(template_id)
        if idx is None:
            raise NotFoundError("Mẫu đánh giá nhanh không tồn tại")
        return self._templates[idx]

    def add(self, template: QuickActionTemplate) -> QuickActionTemplate:
        """Insert a new template at the front. Ids must be unique."""

        template = self._validate(template)
        if self._index_of(template.id) is not None:
            raise ValidationError(f"Mẫu '{template.id}' đã tồn tại")
        self._templates.insert(0, template)
        return template

    def edit(self, template: QuickActionTemplate) -> QuickActionTemplate:
        idx = self._index_of(template.id)
        if idx is None:
            raise NotFoundError("Mẫu đánh giá nhanh không tồn tại")
        template = self._validate(template)
        self._templates[idx] = template
        return template

    def remove(self, template_id: str) -> None:
        idx = self._index_of(template_id)
        if idx is None:
            raise NotFoundError("Mẫu đánh giá nhanh không tồn tại")
        del self._templates[idx]

    def reset_to_defaults(self) -> None:
        self._templates = list(DEFAULT_QUICK_ACTIONS)

    @staticmethod
    def apply(template: QuickActionTemplate, draft: Optional[EvaluationDraft] = None) -> EvaluationDraft:
        """Copy the template's values onto a draft; the selection on `draft` is kept."""

        return replace(
            draft or EvaluationDraft(),
            type=template.type,
            study_point=template.study_point,
            discipline_point=template.discipline_point,
            content=template.content,
        )

    def quick_create(
        self,
        template: QuickActionTemplate,
        *,
        student_id: Optional[int],
        class_id: Optional[int],
        store: DraftSink,
    ) -> EvaluationRecord:
        if not student_id or not class_id:
            raise PreconditionError("Vui lòng chọn Lớp và Học sinh trước khi tạo nhanh")

        draft = self.apply(template, EvaluationDraft(student_id=student_id, class_id=class_id))
        record = store.create(draft)
        logger.info("Quick action %s applied to student %s in class %s", template.id, student_id, class_id)
        return record
