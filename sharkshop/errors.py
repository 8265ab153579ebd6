"""
API error taxonomy.

Every failure a handler can surface is an ``ApiError`` subclass carrying an
HTTP status, a machine-checkable code and a human-readable message. The
handlers registered here turn them, Werkzeug HTTP exceptions, and anything
unexpected into the same JSON error body.
"""
from typing import Dict, Optional

from flask import jsonify, request
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    status_code = 500
    code = "internal"
    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None, **extra):
        self.message = message or self.default_message
        self.field = field
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, object]:
        body: Dict[str, object] = {
            "success": False,
            "error": self.message,
            "code": self.code,
        }
        if self.field:
            body["field"] = self.field
        body.update(self.extra)
        return body


class Unauthenticated(ApiError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Authentication required"


class InvalidCredentials(ApiError):
    status_code = 401
    code = "invalid_credentials"
    default_message = "Invalid credentials"


class ValidationFailed(ApiError):
    status_code = 400
    code = "validation_failed"
    default_message = "Validation failed"


class InvalidCategory(ApiError):
    status_code = 400
    code = "invalid_category"
    default_message = "Invalid category. Category must exist in database and be active."


class Conflict(ApiError):
    # Duplicate records are reported as 400 to keep the documented contract.
    status_code = 400
    code = "conflict"
    default_message = "A record with these details already exists."


class NotFound(ApiError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class Internal(ApiError):
    status_code = 500
    code = "internal"
    default_message = "Internal server error"


HTTP_ERROR_CODES = {
    400: "bad_request",
    404: "not_found",
    405: "method_not_allowed",
    413: "payload_too_large",
}


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError):
        if error.status_code >= 500:
            app.logger.error("%s %s failed: %s", request.method, request.path, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        status = error.code or 500
        body: Dict[str, object] = {
            "success": False,
            "error": error.description or error.name,
            "code": HTTP_ERROR_CODES.get(status, "http_error"),
        }
        if status == 404:
            app.logger.info("404 - Route not found: %s %s", request.method, request.path)
            body["error"] = "Route not found"
            body["method"] = request.method
            body["url"] = request.path
        elif status == 413:
            max_bytes = app.config.get("MAX_CONTENT_LENGTH") or 0
            body["error"] = f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB"
        return jsonify(body), status

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify(Internal().to_dict()), Internal.status_code
