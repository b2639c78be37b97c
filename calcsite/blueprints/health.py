"""Health check blueprint."""

from flask import Blueprint, Response, jsonify

from calcsite.models.rate_tables import get_rate_tables

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Health check endpoint.

    Returns:
        JSON response with status information
    """
    return jsonify(
        {"status": "ok", "currencies": len(get_rate_tables().currencies())}
    )
