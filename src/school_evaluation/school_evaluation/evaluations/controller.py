from __future__ import annotations

from flask import Flask, current_app, jsonify, request, session

from ..access.identity import Identity, identity_from_session
from ..common.http import json_endpoint
from ..core.constants import DEFAULT_LIMIT, DEFAULT_SKIP
from ..core.enums import Resource
from ..core.exceptions import ValidationError
from ..container import Container
from .model import EvaluationDraft


def register(app: Flask, container: Container) -> None:
    policy = container.access_policy

    def _page() -> tuple:
        default_limit = current_app.config.get("DEFAULT_PAGE_LIMIT", DEFAULT_LIMIT)
        return request.args.get("skip", DEFAULT_SKIP), request.args.get("limit", default_limit)

    def _rows(identity: Identity, records):
        scope = policy.scope_for(identity, Resource.EVALUATION)
        return jsonify(policy.mask(scope, [r.to_dict() for r in records]))

    def _one(identity: Identity, record):
        scope = policy.scope_for(identity, Resource.EVALUATION)
        return policy.mask(scope, [record.to_dict()])[0]

    @app.route("/evaluations", methods=["GET"], strict_slashes=False, endpoint="evaluations_list")
    @json_endpoint
    def evaluations_list():
        identity = identity_from_session(session)
        skip, limit = _page()
        records = container.evaluation_service.list_all(identity=identity, skip=skip, limit=limit)
        return _rows(identity, records)

    @app.route("/evaluations", methods=["POST"], strict_slashes=False, endpoint="evaluations_create")
    @json_endpoint
    def evaluations_create():
        identity = identity_from_session(session)
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError("Dữ liệu gửi lên không hợp lệ")

        record = container.evaluation_service.create(identity=identity, draft=EvaluationDraft.from_payload(body))
        return jsonify(_one(identity, record)), 201

    @app.route("/evaluations/<int:evaluation_id>", methods=["GET"], endpoint="evaluations_get")
    @json_endpoint
    def evaluations_get(evaluation_id: int):
        identity = identity_from_session(session)
        record = container.evaluation_service.get(identity=identity, evaluation_id=evaluation_id)
        return jsonify(_one(identity, record))

    @app.route("/evaluations/<int:evaluation_id>", methods=["DELETE"], endpoint="evaluations_delete")
    @json_endpoint
    def evaluations_delete(evaluation_id: int):
        identity = identity_from_session(session)
        container.evaluation_service.delete(identity=identity, evaluation_id=evaluation_id)
        return "", 204

    @app.route("/evaluations/student/<int:student_id>", methods=["GET"], endpoint="evaluations_of_student")
    @json_endpoint
    def evaluations_of_student(student_id: int):
        identity = identity_from_session(session)
        skip, limit = _page()
        records = container.evaluation_service.list_for_student(
            identity=identity, student_id=student_id, skip=skip, limit=limit
        )
        return _rows(identity, records)

    @app.route(
        "/evaluations/student/<int:student_id>/class/<int:class_id>",
        methods=["GET"],
        endpoint="evaluations_of_student_in_class",
    )
    @json_endpoint
    def evaluations_of_student_in_class(student_id: int, class_id: int):
        identity = identity_from_session(session)
        skip, limit = _page()
        records = container.evaluation_service.list_for_student(
            identity=identity, student_id=student_id, class_id=class_id, skip=skip, limit=limit
        )
        return _rows(identity, records)

    @app.route("/evaluations/teacher/<int:teacher_id>", methods=["GET"], endpoint="evaluations_of_teacher")
    @json_endpoint
    def evaluations_of_teacher(teacher_id: int):
        identity = identity_from_session(session)
        skip, limit = _page()
        records = container.evaluation_service.list_for_teacher(
            identity=identity, teacher_id=teacher_id, skip=skip, limit=limit
        )
        return _rows(identity, records)

    @app.route("/evaluations/student/<int:student_id>/summary", methods=["GET"], endpoint="evaluations_summary")
    @app.route("/evaluations/total_score/<int:student_id>", methods=["GET"], endpoint="evaluations_total_score")
    @json_endpoint
    def evaluations_summary(student_id: int):
        identity = identity_from_session(session)
        summary = container.evaluation_service.summary(identity=identity, student_id=student_id)
        return jsonify(summary.to_dict())

    @app.route(
        "/evaluations/student/<int:student_id>/class/<int:class_id>/summary",
        methods=["GET"],
        endpoint="evaluations_class_summary",
    )
    @json_endpoint
    def evaluations_class_summary(student_id: int, class_id: int):
        identity = identity_from_session(session)
        summary = container.evaluation_service.summary(identity=identity, student_id=student_id, class_id=class_id)
        return jsonify(summary.to_dict())
