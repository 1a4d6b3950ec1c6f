"""JSON request/response helpers shared by the controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import jsonify, request

from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def error_response(message: str, status: int, error: Optional[str] = None):
    body = {"message": message}
    if error:
        body["error"] = error
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def json_errors(failure_message: str):
    """Map domain errors to 400/404 and anything else to 500 with ``failure_message``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return error_response(str(e), 400)
            except NotFoundError as e:
                return error_response(str(e), 404)
            except Exception as e:
                logger.exception("%s (%s %s)", failure_message, request.method, request.path)
                return error_response(failure_message, 500, str(e))

        return wrapper

    return decorator
