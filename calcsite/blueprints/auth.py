"""
Admin capability check.

Admin endpoints are gated by a single capability token supplied in the
``X-Admin-Token`` header. This is a placeholder hook, not a user
authentication system: when no token is configured every admin request is
refused.
"""

import hmac
from functools import wraps
from typing import Any, Callable

from flask import current_app, jsonify, request

ADMIN_TOKEN_HEADER = "X-Admin-Token"


def has_admin_capability() -> bool:
    """Check the request's admin token against the configured one."""
    expected = current_app.config.get("ADMIN_TOKEN")
    if not expected:
        return False
    supplied = request.headers.get(ADMIN_TOKEN_HEADER, "")
    return hmac.compare_digest(supplied.encode(), expected.encode())


def admin_required(view: Callable[..., Any]) -> Callable[..., Any]:
    """Reject the request with 403 unless it carries the admin capability."""

    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if not has_admin_capability():
            current_app.logger.warning(f"Rejected admin request to {request.path}")
            return jsonify({"success": False, "error": "Forbidden"}), 403
        return view(*args, **kwargs)

    return wrapper
