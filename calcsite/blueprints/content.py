"""
Content blueprint.

Serves calculator page essays and FAQs, and exposes the admin endpoints that
edit them. Admin endpoints require the admin capability token.
"""

from typing import Any, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from calcsite.services.content_service import (
    ContentConflictError,
    ContentIntegrityError,
    ContentNotFoundError,
    ContentService,
    FaqCreate,
    FaqUpdate,
    SeoContentCreate,
    SeoContentUpdate,
)

from .auth import admin_required

content_bp = Blueprint("content", __name__, url_prefix="/api")


def _service() -> ContentService:
    return ContentService()


def _json_body() -> Any:
    return request.get_json(silent=True) or {}


@content_bp.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError) -> Any:
    return (
        jsonify(
            {
                "success": False,
                "error": "Invalid input",
                "details": e.errors(include_url=False, include_context=False),
            }
        ),
        400,
    )


@content_bp.errorhandler(ContentNotFoundError)
def handle_not_found(e: ContentNotFoundError) -> Any:
    return jsonify({"success": False, "error": str(e)}), 404


@content_bp.errorhandler(ContentConflictError)
def handle_conflict(e: ContentConflictError) -> Any:
    return jsonify({"success": False, "error": str(e)}), 409


@content_bp.errorhandler(ContentIntegrityError)
def handle_integrity_error(e: ContentIntegrityError) -> Any:
    return jsonify({"success": False, "error": str(e)}), 400


@content_bp.errorhandler(SQLAlchemyError)
def handle_database_error(e: SQLAlchemyError) -> Any:
    current_app.logger.error(f"Content store error on {request.path}: {str(e)}")
    return jsonify({"success": False, "error": "Content store unavailable"}), 503


@content_bp.route("/content/<key>", methods=["GET"])
def page_content(key: str) -> Any:
    """Essay for a calculator page, from the store or the defaults."""
    content = _service().get_page_content(key)
    if content is None:
        return jsonify({"success": False, "error": f"No content for {key}"}), 404
    return jsonify({"success": True, "data": content.model_dump()})


@content_bp.route("/seo-content", methods=["GET"])
def list_seo_content() -> Any:
    return jsonify({"success": True, "data": _service().list_content()})


@content_bp.route("/seo-content/<content_id>", methods=["GET"])
def get_seo_content(content_id: str) -> Any:
    return jsonify({"success": True, "data": _service().get_content(content_id)})


@content_bp.route("/seo-content", methods=["POST"])
@admin_required
def create_seo_content() -> Any:
    data = SeoContentCreate.model_validate(_json_body())
    record = _service().create_content(data)
    return jsonify({"success": True, "data": record}), 201


@content_bp.route("/seo-content/<content_id>", methods=["PUT"])
@admin_required
def update_seo_content(content_id: str) -> Any:
    data = SeoContentUpdate.model_validate(_json_body())
    record = _service().update_content(content_id, data)
    return jsonify({"success": True, "data": record})


@content_bp.route("/seo-content/<content_id>", methods=["DELETE"])
@admin_required
def delete_seo_content(content_id: str) -> Any:
    _service().delete_content(content_id)
    return jsonify({"success": True})


@content_bp.route("/faqs", methods=["GET"])
def list_faqs() -> Any:
    """FAQs in display order, optionally filtered by ``?category=``."""
    category: Optional[str] = request.args.get("category") or None
    return jsonify({"success": True, "data": _service().list_faqs(category)})


@content_bp.route("/faqs", methods=["POST"])
@admin_required
def create_faq() -> Any:
    data = FaqCreate.model_validate(_json_body())
    return jsonify({"success": True, "data": _service().create_faq(data)}), 201


@content_bp.route("/faqs/<int:faq_id>", methods=["PUT"])
@admin_required
def update_faq(faq_id: int) -> Any:
    data = FaqUpdate.model_validate(_json_body())
    return jsonify({"success": True, "data": _service().update_faq(faq_id, data)})


@content_bp.route("/faqs/<int:faq_id>", methods=["DELETE"])
@admin_required
def delete_faq(faq_id: int) -> Any:
    _service().delete_faq(faq_id)
    return jsonify({"success": True})
