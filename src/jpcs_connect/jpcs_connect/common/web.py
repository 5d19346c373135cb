"""Flask glue shared by the feature controllers."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    AuthRequiredError,
    DomainError,
    DuplicateCheckinError,
    NotRegisteredError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS = [
    (ValidationError, 400),
    (AuthRequiredError, 401),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotRegisteredError, 404),
    (DuplicateCheckinError, 409),
    (StoreUnavailableError, 503),
]


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for exc_type, status in _STATUS:
            if isinstance(e, exc_type):
                if status >= 500:
                    logger.error("Request %s failed: %s", request.path, e)
                return error_response(str(e) or "Service unavailable", status)
        return error_response(str(e), 400)


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def login_required(view):
    @wraps(view)
    async def wrapper(*args, **kwargs):
        if "uid" not in session:
            raise AuthRequiredError("Please sign in to continue")
        return await view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    async def wrapper(*args, **kwargs):
        if "uid" not in session:
            raise AuthRequiredError("Please sign in to continue")
        if session.get("role") != Role.ADMIN.value:
            raise AuthorizationError("Administrator access required")
        return await view(*args, **kwargs)

    return wrapper
