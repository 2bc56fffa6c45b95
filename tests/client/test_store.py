from __future__ import annotations

import json

import httpx
import pytest

from src.school_evaluation.school_evaluation.client.api import ApiClient
from src.school_evaluation.school_evaluation.client.store import HttpEvaluationStore
from src.school_evaluation.school_evaluation.core.constants import GENERIC_ERROR_MESSAGE
from src.school_evaluation.school_evaluation.core.enums import EvaluationType
from src.school_evaluation.school_evaluation.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from src.school_evaluation.school_evaluation.evaluations.model import EvaluationDraft

ROW = {
    "id": 7,
    "student_id": 3,
    "class_id": 1,
    "teacher_id": 2,
    "type": "study",
    "study_point": 2,
    "discipline_point": 0,
    "content": "Phát biểu",
    "date": "2024-09-15",
    "student": "Học sinh Demo",
}


def _store(handler):
    seen: list[httpx.Request] = []

    def _wrapped(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    api = ApiClient("http://testserver", transport=httpx.MockTransport(_wrapped))
    return HttpEvaluationStore(api), seen


def test_create_posts_payload_and_decodes_record():
    store, seen = _store(lambda request: httpx.Response(201, json=ROW))
    record = store.create(EvaluationDraft(student_id=3, class_id=1, type=EvaluationType.STUDY, study_point=2))

    assert record.evaluation_id == 7
    assert record.student == "Học sinh Demo"
    [request] = seen
    assert request.method == "POST"
    assert request.url.path == "/evaluations"
    assert json.loads(request.content) == {
        "student_id": 3,
        "class_id": 1,
        "type": "study",
        "study_point": 2,
        "discipline_point": 0,
        "content": None,
    }


def test_invalid_draft_never_reaches_the_network():
    store, seen = _store(lambda request: httpx.Response(201, json=ROW))
    with pytest.raises(ValidationError):
        store.create(EvaluationDraft(student_id=3, type=EvaluationType.STUDY))
    assert seen == []


def test_list_routes_by_scope():
    store, seen = _store(lambda request: httpx.Response(200, json=[ROW]))

    store.list()
    store.list(student_id=3)
    store.list(student_id=3, class_id=1, skip=10, limit=5)
    store.list_for_teacher(2)

    assert [r.url.path for r in seen] == [
        "/evaluations",
        "/evaluations/student/3",
        "/evaluations/student/3/class/1",
        "/evaluations/teacher/2",
    ]
    assert seen[2].url.params["skip"] == "10"
    assert seen[2].url.params["limit"] == "5"


def test_class_filter_needs_student():
    store, seen = _store(lambda request: httpx.Response(200, json=[]))
    with pytest.raises(ValidationError):
        store.list(class_id=1)
    assert seen == []


def test_summary_paths():
    body = {"final_study_point": 104, "final_discipline_point": 98, "student_id": 3}
    store, seen = _store(lambda request: httpx.Response(200, json=body))

    assert store.summary(student_id=3).final_study_point == 104
    store.summary(student_id=3, class_id=1)
    assert [r.url.path for r in seen] == [
        "/evaluations/student/3/summary",
        "/evaluations/student/3/class/1/summary",
    ]


def test_delete_accepts_empty_204():
    store, seen = _store(lambda request: httpx.Response(204))
    assert store.delete(7) is None
    assert seen[0].method == "DELETE"


@pytest.mark.parametrize(
    "status,error",
    [
        (400, ValidationError),
        (422, ValidationError),
        (401, AuthorizationError),
        (403, AuthorizationError),
        (404, NotFoundError),
        (500, TransportError),
        (502, TransportError),
    ],
)
def test_status_mapping_keeps_server_message(status, error):
    store, _ = _store(lambda request: httpx.Response(status, json={"detail": "Thông báo từ máy chủ"}))
    with pytest.raises(error, match="Thông báo từ máy chủ"):
        store.delete(7)


def test_message_key_and_generic_fallback():
    store, _ = _store(lambda request: httpx.Response(500, json={"message": "Máy chủ bận"}))
    with pytest.raises(TransportError) as exc:
        store.delete(7)
    assert str(exc.value) == "Máy chủ bận"
    assert exc.value.status_code == 500

    store, _ = _store(lambda request: httpx.Response(503, text="<html>bad gateway</html>"))
    with pytest.raises(TransportError, match=GENERIC_ERROR_MESSAGE):
        store.delete(7)


def test_connection_failure_is_transport_error():
    def _boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    store, _ = _store(_boom)
    with pytest.raises(TransportError) as exc:
        store.list()
    assert exc.value.status_code is None
    assert str(exc.value) == GENERIC_ERROR_MESSAGE


def test_malformed_body_is_transport_error():
    store, _ = _store(lambda request: httpx.Response(200, json=[{"id": "x"}]))
    with pytest.raises(TransportError):
        store.list()
