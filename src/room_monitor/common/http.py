from __future__ import annotations

from flask import jsonify, request

from ..core.exceptions import DomainError, MalformedRecordError, NotFoundError, ValidationError
from .logging import get_logger

logger = get_logger(__name__)


def json_payload():
    """Request body as parsed JSON; anything else is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Request body must be JSON")
    return data


def json_object() -> dict:
    data = json_payload()
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def error_response(err: Exception):
    if isinstance(err, NotFoundError):
        return jsonify({"success": False, "message": str(err)}), 404
    if isinstance(err, (ValidationError, MalformedRecordError)):
        return jsonify({"success": False, "message": str(err)}), 400
    if isinstance(err, DomainError):
        return jsonify({"success": False, "message": str(err)}), 422

    logger.exception("request_failed", path=request.path)
    return jsonify({"success": False, "message": "Internal error"}), 500


def conflict_response(conflict):
    return jsonify({"success": False, "message": conflict.message, "conflict": conflict.to_dict()}), 409
