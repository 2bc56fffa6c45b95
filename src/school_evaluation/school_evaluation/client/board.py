from __future__ import annotations

import logging
from typing import Optional, Union

from ..access.identity import Identity
from ..access.policy import AccessPolicy, AccessScope
from ..core.constants import DEFAULT_LIMIT, DEFAULT_SKIP
from ..core.enums import Operation, Resource
from ..core.exceptions import DomainError, PreconditionError
from ..evaluations.filters import EvaluationCriteria, filter_evaluations
from ..evaluations.model import EvaluationDraft, EvaluationRecord, ScoreSummary
from ..evaluations.scoring import summarize
from ..notifications.sink import LoggingNotificationSink, NotificationSink
from ..quick_actions.model import QuickActionTemplate
from ..quick_actions.registry import QuickActionTemplateRegistry
from .store import EvaluationStore
from .tracker import RequestTicket, RequestTracker

logger = logging.getLogger(__name__)

LIST_KEY = "evaluations"
SUMMARY_KEY = "summary"


class EvaluationBoard:
    """Dashboard-side state for the evaluation screen.

    Holds the fetched rows, the selected student/class and its summary, and
    the session's quick-action templates. Mutations are applied locally only
    after the store confirms them; a failed call leaves state untouched.
    Every failure goes to the notification sink and is re-raised.
    """

    def __init__(
        self,
        store: EvaluationStore,
        *,
        identity: Identity,
        policy: Optional[AccessPolicy] = None,
        notifier: Optional[NotificationSink] = None,
        quick_actions: Optional[QuickActionTemplateRegistry] = None,
    ):
        self._store = store
        self._identity = identity
        self._policy = policy or AccessPolicy()
        self._notifier = notifier or LoggingNotificationSink()
        self.quick_actions = quick_actions or QuickActionTemplateRegistry()

        self._tracker = RequestTracker()
        self._records: list[EvaluationRecord] = []
        self.summary: Optional[ScoreSummary] = None
        self.selected_student_id: Optional[int] = None
        self.selected_class_id: Optional[int] = None
        self.error: Optional[str] = None

    @property
    def records(self) -> list[EvaluationRecord]:
        return list(self._records)

    @property
    def scope(self) -> AccessScope:
        return self._policy.scope_for(self._identity, Resource.EVALUATION)

    def _fail(self, error: DomainError) -> None:
        self.error = str(error)
        self._notifier.error(str(error))

    # ---- reads ------------------------------------------------------------

    def refresh(
        self,
        *,
        student_id: Optional[int] = None,
        class_id: Optional[int] = None,
        skip: int = DEFAULT_SKIP,
        limit: int = DEFAULT_LIMIT,
    ) -> list[EvaluationRecord]:
        ticket = self._tracker.begin(LIST_KEY)
        try:
            rows = self._store.list(student_id=student_id, class_id=class_id, skip=skip, limit=limit)
        except DomainError as e:
            if self._tracker.is_current(ticket):
                self._fail(e)
            raise

        if not self._tracker.is_current(ticket):
            logger.debug("Discarded stale evaluation list (generation %s)", ticket.generation)
            return self.records

        self._records = list(rows)
        self.error = None
        return self.records

    def select(self, student_id: Optional[int], class_id: Optional[int] = None) -> Optional[ScoreSummary]:
        """Change the selected scope and load its summary.

        Any summary still in flight for the previous selection is discarded when it arrives.
        """

        self.selected_student_id = student_id
        self.selected_class_id = class_id
        if student_id is None:
            self._tracker.cancel(SUMMARY_KEY)
            self.summary = None
            return None
        return self.load_summary()

    def request_summary(self) -> RequestTicket:
        return self._tracker.begin(SUMMARY_KEY)

    def apply_summary(self, ticket: RequestTicket, summary: ScoreSummary) -> bool:
        """Apply a fetched summary unless a newer request superseded `ticket`."""

        if not self._tracker.is_current(ticket):
            logger.debug("Discarded stale summary for student %s (generation %s)", summary.student_id, ticket.generation)
            return False
        self.summary = summary
        return True

    def _fetch_summary(self, ticket: RequestTicket) -> None:
        summary = self._store.summary(student_id=self.selected_student_id, class_id=self.selected_class_id)
        self.apply_summary(ticket, summary)

    def load_summary(self) -> Optional[ScoreSummary]:
        """Fetch the summary of the current selection.

        A failure is reported only while its request is still the latest one;
        a superseded failure is dropped and the current summary is returned.
        """

        if self.selected_student_id is None:
            return None
        ticket = self.request_summary()
        try:
            self._fetch_summary(ticket)
        except DomainError as e:
            if not self._tracker.is_current(ticket):
                logger.debug("Discarded stale summary error (generation %s): %s", ticket.generation, e)
                return self.summary
            self._fail(e)
            raise
        return self.summary

    def _refresh_summary_best_effort(self, student_id: int) -> None:
        if self.selected_student_id is None or self.selected_student_id != student_id:
            return
        try:
            self._fetch_summary(self.request_summary())
        except DomainError as e:
            logger.warning("Summary refresh for student %s failed: %s", student_id, e)

    def preview_summary(self) -> ScoreSummary:
        """Local re-derivation over the loaded rows of the selected scope; never stored."""

        rows = [
            r
            for r in self._records
            if (self.selected_student_id is None or r.student_id == self.selected_student_id)
            and (self.selected_class_id is None or r.class_id == self.selected_class_id)
        ]
        return summarize(rows, student_id=self.selected_student_id, class_id=self.selected_class_id)

    def visible_rows(self, criteria: Optional[EvaluationCriteria] = None) -> list[dict]:
        rows = filter_evaluations(self._records, criteria)
        return self._policy.mask(self.scope, [r.to_dict() for r in rows])

    # ---- mutations --------------------------------------------------------

    def create(self, draft: EvaluationDraft) -> EvaluationRecord:
        try:
            self._policy.ensure(self.scope, Operation.CREATE)
            record = self._store.create(draft)
        except DomainError as e:
            self._fail(e)
            raise

        self._records.insert(0, record)
        self.error = None
        self._notifier.success("Tạo đánh giá thành công")
        self._refresh_summary_best_effort(record.student_id)
        return record

    def delete(self, evaluation_id: int) -> None:
        """Delete one record once the store acknowledges it.

        Ownership is checked locally; a record that is not loaded is fetched first.
        """

        record = next((r for r in self._records if r.evaluation_id == evaluation_id), None)
        scope = self.scope
        try:
            self._policy.ensure(scope, Operation.DELETE)
            if record is None and scope.capability.own_only:
                record = self._store.get(evaluation_id)
            if record is not None:
                self._policy.ensure(scope, Operation.DELETE, owned=record.teacher_id == self._identity.user_id)
            self._store.delete(evaluation_id)
        except DomainError as e:
            self._fail(e)
            raise

        self._records = [r for r in self._records if r.evaluation_id != evaluation_id]
        self.error = None
        self._notifier.success("Xóa đánh giá thành công")
        if record:
            self._refresh_summary_best_effort(record.student_id)

    def correct(self, evaluation_id: int, draft: EvaluationDraft) -> EvaluationRecord:
        """Replace a mistaken entry: delete it, then create `draft`."""

        try:
            draft = draft.validated()
        except DomainError as e:
            self._fail(e)
            raise
        self.delete(evaluation_id)
        return self.create(draft)

    # ---- quick actions ----------------------------------------------------

    def _template(self, template: Union[str, QuickActionTemplate]) -> QuickActionTemplate:
        if isinstance(template, QuickActionTemplate):
            return template
        return self.quick_actions.get(template)

    def apply_quick_action(self, template: Union[str, QuickActionTemplate]) -> EvaluationDraft:
        draft = EvaluationDraft(student_id=self.selected_student_id, class_id=self.selected_class_id)
        return self.quick_actions.apply(self._template(template), draft)

    def quick_create(self, template: Union[str, QuickActionTemplate]) -> EvaluationRecord:
        try:
            return self.quick_actions.quick_create(
                self._template(template),
                student_id=self.selected_student_id,
                class_id=self.selected_class_id,
                store=self,
            )
        except PreconditionError as e:
            self._fail(e)
            raise
