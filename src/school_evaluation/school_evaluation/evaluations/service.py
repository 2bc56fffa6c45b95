from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from ..access.identity import Identity
from ..access.policy import AccessPolicy
from ..common.datetime_utils import today
from ..common.validators import require_id, require_page
from ..core.constants import DEFAULT_LIMIT, DEFAULT_SKIP
from ..core.enums import Operation, Resource, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..roster.repository import RosterProvider
from .model import EvaluationDraft, EvaluationRecord, ScoreSummary
from .repository import EvaluationRepository
from .scoring import summarize

logger = logging.getLogger(__name__)


class EvaluationService:
    """Use cases over the evaluation ledger: create / list / delete / summary.

    There is no update operation: a mistaken entry is deleted and re-created.
    Summaries are recomputed from the ledger on every call.
    """

    def __init__(
        self,
        evaluations: EvaluationRepository,
        roster: RosterProvider,
        *,
        policy: Optional[AccessPolicy] = None,
        clock: Callable[[], date] = today,
    ):
        self._evaluations = evaluations
        self._roster = roster
        self._policy = policy or AccessPolicy()
        self._clock = clock

    @property
    def policy(self) -> AccessPolicy:
        return self._policy

    # ---- visibility -------------------------------------------------------

    def _visible_student_ids(self, identity: Identity) -> Optional[set[int]]:
        """Student ids whose rows `identity` may read; None means every student."""

        if identity.has(Role.TEACHER) or identity.has(Role.MANAGER):
            return None

        visible: set[int] = set()
        if identity.has(Role.STUDENT):
            visible.add(identity.user_id)
        if identity.has(Role.PARENT):
            visible.update(int(s) for s in self._roster.children_of(parent_id=identity.user_id))
        return visible

    def _ensure_can_view_student(self, identity: Identity, student_id: int) -> None:
        visible = self._visible_student_ids(identity)
        if visible is not None and int(student_id) not in visible:
            logger.warning("User %s may not view evaluations of student %s", identity.user_id, student_id)
            raise AuthorizationError("Bạn không có quyền xem đánh giá của học sinh này")

    # ---- commands ---------------------------------------------------------

    def create(self, *, identity: Identity, draft: EvaluationDraft) -> EvaluationRecord:
        draft = draft.validated()

        scope = self._policy.scope_for(identity, Resource.EVALUATION)
        owned = None
        if scope.capability.own_only:
            owned = self._roster.teacher_teaches_class(teacher_id=identity.user_id, class_id=draft.class_id)
        self._policy.ensure(scope, Operation.CREATE, owned=owned)

        if not self._roster.class_has_student(class_id=draft.class_id, student_id=draft.student_id):
            raise ValidationError("Học sinh không thuộc lớp này")

        evaluation_id = self._evaluations.create(
            student_id=draft.student_id,
            class_id=draft.class_id,
            teacher_id=identity.user_id,
            evaluation_type=draft.type,
            study_point=draft.study_point,
            discipline_point=draft.discipline_point,
            content=draft.content,
            event_date=draft.event_date or self._clock(),
        )
        logger.info(
            "Evaluation %s created by teacher %s for student %s in class %s",
            evaluation_id,
            identity.user_id,
            draft.student_id,
            draft.class_id,
        )

        record = self._evaluations.get(evaluation_id)
        if not record:
            raise NotFoundError("Không tìm thấy đánh giá vừa tạo")
        return record

    def delete(self, *, identity: Identity, evaluation_id: int) -> None:
        evaluation_id = require_id(evaluation_id, "Đánh giá")

        record = self._evaluations.get(evaluation_id)
        if not record:
            raise NotFoundError("Đánh giá không tồn tại")

        scope = self._policy.scope_for(identity, Resource.EVALUATION)
        self._policy.ensure(scope, Operation.DELETE, owned=record.teacher_id == identity.user_id)

        if not self._evaluations.delete(evaluation_id):
            raise NotFoundError("Đánh giá không tồn tại")
        logger.info("Evaluation %s deleted by teacher %s", evaluation_id, identity.user_id)

    # ---- queries ----------------------------------------------------------

    def get(self, *, identity: Identity, evaluation_id: int) -> EvaluationRecord:
        record = self._evaluations.get(require_id(evaluation_id, "Đánh giá"))
        if not record:
            raise NotFoundError("Đánh giá không tồn tại")
        self._ensure_can_view_student(identity, record.student_id)
        return record

    def list_all(
        self,
        *,
        identity: Identity,
        skip: int = DEFAULT_SKIP,
        limit: int = DEFAULT_LIMIT,
    ) -> Sequence[EvaluationRecord]:
        skip, limit = require_page(skip, limit)
        visible = self._visible_student_ids(identity)
        student_ids = sorted(visible) if visible is not None else None
        return self._evaluations.list(student_ids=student_ids, skip=skip, limit=limit)

    def list_for_student(
        self,
        *,
        identity: Identity,
        student_id: int,
        class_id: Optional[int] = None,
        skip: int = DEFAULT_SKIP,
        limit: int = DEFAULT_LIMIT,
    ) -> Sequence[EvaluationRecord]:
        student_id = require_id(student_id, "Học sinh")
        if class_id is not None:
            class_id = require_id(class_id, "Lớp")
        skip, limit = require_page(skip, limit)

        self._ensure_can_view_student(identity, student_id)
        return self._evaluations.list(student_ids=[student_id], class_id=class_id, skip=skip, limit=limit)

    def list_for_teacher(
        self,
        *,
        identity: Identity,
        teacher_id: int,
        skip: int = DEFAULT_SKIP,
        limit: int = DEFAULT_LIMIT,
    ) -> Sequence[EvaluationRecord]:
        teacher_id = require_id(teacher_id, "Giáo viên")
        skip, limit = require_page(skip, limit)

        visible = self._visible_student_ids(identity)
        student_ids = sorted(visible) if visible is not None else None
        return self._evaluations.list(student_ids=student_ids, teacher_id=teacher_id, skip=skip, limit=limit)

    def summary(self, *, identity: Identity, student_id: int, class_id: Optional[int] = None) -> ScoreSummary:
        student_id = require_id(student_id, "Học sinh")
        if class_id is not None:
            class_id = require_id(class_id, "Lớp")

        self._ensure_can_view_student(identity, student_id)
        records = self._evaluations.list(student_ids=[student_id], class_id=class_id)
        return summarize(records, student_id=student_id, class_id=class_id)
