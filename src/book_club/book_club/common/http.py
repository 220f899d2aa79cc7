from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Dict

from flask import current_app, jsonify, request

from ..core.exceptions import ConflictError, NotFoundError, ValidationError


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def read_json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        # An empty body reads as {}; anything else that failed to parse is rejected.
        if request.get_data(cache=True):
            raise ValidationError("Request body must be valid JSON")
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def api_errors(failure_message: str) -> Callable:
    """Map domain exceptions raised by a view to JSON error responses.

    ValidationError -> 400, NotFoundError -> 404, ConflictError -> 409,
    anything else -> 500 with `failure_message` (details go to the log only).
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return json_error(str(e), 400)
            except NotFoundError as e:
                return json_error(str(e), 404)
            except ConflictError as e:
                return json_error(str(e), 409)
            except Exception:
                current_app.logger.exception(failure_message)
                return json_error(failure_message, 500)

        return wrapper

    return decorator
