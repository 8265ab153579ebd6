"""
Admin request guard.

Flask-JWT-Extended looks the token up in the admin cookie first and the
``Authorization: Bearer`` header second (``JWT_TOKEN_LOCATION``), so browser
sessions and API clients share one check. Every rejection is answered with
the same ``Unauthenticated`` body.
"""
from functools import wraps
from typing import Dict

from flask import current_app, jsonify
from flask_jwt_extended import get_jwt, verify_jwt_in_request

from sharkshop.errors import Unauthenticated

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


def unauthenticated_response(message: str):
    error = Unauthenticated(message)
    return jsonify(error.to_dict()), error.status_code


def register_token_handlers(jwt_manager) -> None:
    @jwt_manager.unauthorized_loader
    def missing_token(reason: str):
        current_app.logger.info("Rejected admin request: %s", reason)
        return unauthenticated_response("Authentication required")

    @jwt_manager.invalid_token_loader
    def invalid_token(reason: str):
        current_app.logger.info("Rejected admin token: %s", reason)
        return unauthenticated_response(INVALID_TOKEN_MESSAGE)

    @jwt_manager.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        current_app.logger.info("Rejected expired admin token for %s", jwt_payload.get("sub"))
        return unauthenticated_response(INVALID_TOKEN_MESSAGE)


def authenticate_request() -> Dict:
    verify_jwt_in_request()
    claims = get_jwt()
    if not claims.get("isAdmin"):
        raise Unauthenticated(INVALID_TOKEN_MESSAGE)
    return claims


def admin_required(f):
    """Reject the request with 401 unless it carries a valid admin token.

    The verified claims are available to the view through ``get_jwt()``.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        authenticate_request()
        return f(*args, **kwargs)
    return wrapper
