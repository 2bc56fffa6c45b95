from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.constants import GENERIC_ERROR_MESSAGE
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def status_for(error: DomainError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, NotFoundError):
        return 404
    return 500


def error_response(error: DomainError):
    return jsonify({"detail": str(error)}), status_for(error)


def json_endpoint(view):
    """Translate domain errors raised by a JSON view into `{"detail": ...}` responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"detail": "Vui lòng đăng nhập để tiếp tục"}), 401
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return jsonify({"detail": GENERIC_ERROR_MESSAGE}), 500

    return wrapper
