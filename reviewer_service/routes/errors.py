"""Error responses shared by all API routes.

Body format for every failure: {"error": {"code": ..., "message": ...}}
"""
import logging

from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from reviewer_service.services.errors import (
    ConcurrentUpdateError,
    ErrorKind,
    ReviewServiceError,
)

logger = logging.getLogger(__name__)

BAD_REQUEST = "BAD_REQUEST"
UNHANDLED_SERVER_ERROR = "UNHANDLED_SERVER_ERROR"
CONCURRENT_UPDATE = "CONCURRENT_UPDATE"

# ErrorKind -> (HTTP status, API error code); must cover every kind
ERROR_RESPONSES = {
    ErrorKind.TEAM_EXISTS: (400, "TEAM_EXISTS"),
    ErrorKind.TEAM_NOT_FOUND: (404, "NOT_FOUND"),
    ErrorKind.USER_NOT_FOUND: (404, "NOT_FOUND"),
    ErrorKind.AUTHOR_NOT_FOUND: (404, "NOT_FOUND"),
    ErrorKind.PULL_REQUEST_EXISTS: (409, "PR_EXISTS"),
    ErrorKind.PULL_REQUEST_NOT_FOUND: (404, "NOT_FOUND"),
    ErrorKind.PR_MERGED: (409, "PR_MERGED"),
    ErrorKind.REVIEWER_NOT_ASSIGNED: (409, "NOT_ASSIGNED"),
    ErrorKind.NO_REVIEWERS_AVAILABLE: (409, "NO_CANDIDATE"),
}


class BadRequest(Exception):
    """Request could not be parsed or failed validation."""


def error_response(status: int, code: str, message: str):
    return jsonify({'error': {'code': code, 'message': message}}), status


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg')}" if location else item.get("msg", ""))
    return "; ".join(parts)


def register_error_handlers(app):
    """Map service and validation failures to JSON error responses."""

    @app.errorhandler(ReviewServiceError)
    def handle_review_error(e):
        status, code = ERROR_RESPONSES[e.kind]
        logger.warning(f"{e.kind.value}: {e.message}")
        return error_response(status, code, e.message)

    @app.errorhandler(ConcurrentUpdateError)
    def handle_concurrent_update(e):
        logger.warning(f"Concurrent update: {e}")
        return error_response(409, CONCURRENT_UPDATE, str(e))

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return error_response(400, BAD_REQUEST, _format_validation_error(e))

    @app.errorhandler(BadRequest)
    def handle_bad_request(e):
        return error_response(400, BAD_REQUEST, str(e))

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        code = "NOT_FOUND" if e.code == 404 else BAD_REQUEST
        return error_response(e.code, code, e.description or e.name)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.error(f"Unhandled error: {e}", exc_info=True)
        return error_response(500, UNHANDLED_SERVER_ERROR, str(e))
