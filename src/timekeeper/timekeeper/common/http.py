from __future__ import annotations

import logging
from datetime import datetime
from functools import wraps

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    ActiveSessionExistsError,
    AuthenticationError,
    AuthorizationError,
    DataAccessError,
    DomainError,
    InvalidStateError,
    NoActiveSessionError,
    NotFoundError,
    UsernameAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

# Most specific first; the first isinstance match wins.
_STATUS_BY_ERROR = (
    (UserNotFoundError, 404),
    (NotFoundError, 404),
    (UsernameAlreadyExistsError, 409),
    (InvalidStateError, 409),
    (ActiveSessionExistsError, 400),
    (NoActiveSessionError, 400),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
)


def error_body(message: str):
    return jsonify({"timestamp": datetime.now().isoformat(), "message": message})


def status_for(error: DomainError) -> int:
    for kind, status in _STATUS_BY_ERROR:
        if isinstance(error, kind):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        logger.warning("%s: %s", type(e).__name__, e)
        return error_body(str(e)), status

    @app.errorhandler(DataAccessError)
    def handle_data_access_error(e: DataAccessError):
        # Full detail (with the driver error chained) was logged where it was wrapped.
        logger.error("DataAccessError: %s", e)
        return error_body(GENERIC_ERROR_MESSAGE), 500

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("An unexpected error occurred: %s", e)
        return error_body(GENERIC_ERROR_MESSAGE), 500


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "username" not in session:
            return error_body("Authentication required"), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "username" not in session:
            return error_body("Authentication required"), 401
        if session.get("role") != Role.ADMIN.value:
            return error_body("Admin access required"), 403
        return view(*args, **kwargs)

    return wrapper


def current_username() -> str:
    return str(session["username"])


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def int_arg(name: str) -> int:
    value = request.args.get(name)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Query parameter '{name}' must be an integer")
