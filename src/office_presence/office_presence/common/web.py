from __future__ import annotations

import logging
import time
from functools import wraps

from flask import Flask, g, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import DomainError, ValidationError
from ..users.model import Actor

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("office_presence.requests")

SENSITIVE_KEYS = frozenset(
    {"password", "newpassword", "currentpassword", "token", "authorization", "cookie", "secret"}
)


def ok(data=None, *, message: str | None = None, status: int = 200):
    body: dict = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_actor() -> Actor:
    return Actor(user_id=int(session["user_id"]), role=Role(session["role"]))


def json_body() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Authentication required", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Authentication required", 401)
        if session.get("role") != Role.ADMIN.value:
            return fail("Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status_code >= 500:
            logger.error("Store failure on %s %s: %s", request.method, request.path, e)
        return fail(str(e), e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return fail("Internal server error", 500)


def _sanitize_body(body: dict) -> dict:
    return {k: ("[REDACTED]" if str(k).lower() in SENSITIVE_KEYS else v) for k, v in body.items()}


def register_request_logging(app: Flask) -> None:
    """Log method, path, status, duration and user for every request.

    Never logs passwords, tokens or other sensitive body fields.
    """

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.pop("request_started", None)
        duration_ms = int((time.perf_counter() - started) * 1000) if started is not None else -1
        fields = {
            "method": request.method,
            "path": request.full_path.rstrip("?"),
            "status": response.status_code,
            "duration_ms": duration_ms,
            "user_id": session.get("user_id"),
            "ip": request.remote_addr,
        }
        if request.method != "GET":
            body = request.get_json(silent=True)
            if isinstance(body, dict) and body:
                fields["body"] = _sanitize_body(body)

        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        request_logger.log(level, "request %s", fields)
        return response
