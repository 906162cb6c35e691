import traceback

from flask import current_app, jsonify

from inventory_app.extensions import db


def ok(data=None, message: str | None = None, code: int = 200):
    body = {"status": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), code


def fail(message: str, code: int = 400, errors: dict | None = None, error: str | None = None):
    body = {"status": False, "message": message}
    if errors:
        body["errors"] = errors
    if error:
        body["error"] = error
    return jsonify(body), code


def service_error(e):
    return fail(e.message, e.status_code, errors=e.errors)


def internal_error(action: str, e: Exception):
    """Roll back, log and report an unexpected failure as a 500."""
    db.session.rollback()
    current_app.logger.exception(f"[{action}] error: {e}")
    error = traceback.format_exc() if current_app.debug else None
    return fail(f"Failed to {action}: {e}", 500, error=error)
