from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, StoreError, ValidationError

logger = logging.getLogger(__name__)

_STATUS = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    StoreError: 500,
}


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error_response(exc: DomainError):
    status = _STATUS.get(type(exc), 400)
    if status >= 500:
        logger.exception("Store failure while handling %s %s", request.method, request.path)
        return error_response("Internal storage error", status)
    return error_response(str(exc), status)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please log in to continue", 401)
        if session.get("role") != Role.ADMIN.value:
            return error_response("Administrator access required", 403)
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def wants_all_users() -> bool:
    """``?all=true`` switches list/stat endpoints to the admin (every volunteer) view."""

    if request.args.get("all", "").lower() not in {"1", "true", "yes"}:
        return False
    if session.get("role") != Role.ADMIN.value:
        raise AuthorizationError("Administrator access required")
    return True


def _optional_int_arg(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def year_month_args() -> tuple[Optional[int], Optional[int]]:
    return _optional_int_arg("year"), _optional_int_arg("month")


def json_body() -> dict:
    """JSON object body of the request; no body reads as empty."""

    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def client_ip() -> str:
    # Behind trusted proxies ProxyFix has already rewritten remote_addr from X-Forwarded-For.
    return request.remote_addr or ""
