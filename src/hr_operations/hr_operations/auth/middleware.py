from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import current_app, g, jsonify, request

from ..core.enums import EmployeeStatus, Role
from ..core.exceptions import AuthenticationError
from .tokens import CurrentUser, decode_token

TOKEN_COOKIE = "EmployeeToken"
CONTAINER_KEY = "hr_operations"


def _token_from_request() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        token = header[len("Bearer "):].strip()
        if token:
            return token
    return request.cookies.get(TOKEN_COOKIE) or None


def _deny(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def role_required(*roles: Role):
    """Require a valid token; when roles are given, the caller's role must be one of them.

    The verified identity is stored on ``flask.g.current_user``.
    """

    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = _token_from_request()
            if not token:
                return _deny("Access denied. No token provided.", 401)
            try:
                user = decode_token(token, secret=current_app.config["JWT_SECRET"])
            except AuthenticationError as e:
                return _deny(str(e), 401)

            container = current_app.extensions[CONTAINER_KEY]
            employee = container.employees_repo.get(user.id)
            if employee is not None and employee.status != EmployeeStatus.ACTIVE:
                return _deny("Account is inactive. Please contact HR.", 403)

            if allowed and user.role not in allowed:
                return _deny("Access denied. Insufficient permissions.", 403)

            g.current_user = user
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_user() -> CurrentUser:
    return g.current_user
