from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import json_endpoint
from ..core.enums import Resource
from ..core.exceptions import NotFoundError
from ..container import Container
from .identity import identity_from_session


def register(app: Flask, container: Container) -> None:
    @app.route("/access/<resource>", methods=["GET"], endpoint="access_scope")
    @json_endpoint
    def access_scope(resource: str):
        identity = identity_from_session(session)
        try:
            res = Resource(resource)
        except ValueError:
            raise NotFoundError("Tài nguyên không tồn tại")

        scope = container.access_policy.scope_for(identity, res)
        data = scope.to_dict()
        data["user_id"] = identity.user_id
        return jsonify(data)
