"""
Admin authentication and admin management routes.
"""
from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import get_jwt, set_access_cookies, unset_jwt_cookies

from sharkshop import admins
from sharkshop.auth import admin_required, authenticate_request
from sharkshop.errors import InvalidCredentials
from sharkshop.routes import request_payload
from sharkshop.store import get_store
from sharkshop.tokens import claims_to_identity, issue_token

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/login", methods=["POST"])
def login():
    payload = request_payload()
    current_app.logger.info("Login attempt: %s", str(payload.get("email", "")).strip())

    try:
        admin = admins.authenticate(get_store(), payload)
    except InvalidCredentials:
        current_app.logger.warning("Failed admin login for %s", str(payload.get("email", "")).strip())
        raise

    token = issue_token(admin["_id"], admin.get("email", ""), True)

    response = jsonify(
        {
            "success": True,
            "message": "Login successful",
            "admin": admins.serialize_admin_summary(admin),
            "token": token,
        }
    )
    max_age = int(current_app.config["JWT_ACCESS_TOKEN_EXPIRES"].total_seconds())
    set_access_cookies(response, token, max_age=max_age)
    current_app.logger.info("Admin %s signed in", admin["_id"])
    return response


@admin_bp.route("/verify", methods=["GET"])
@admin_required
def verify():
    return jsonify({"success": True, "admin": claims_to_identity(get_jwt())})


@admin_bp.route("/logout", methods=["POST"])
def logout():
    response = jsonify({"success": True, "message": "Logged out successfully"})
    unset_jwt_cookies(response)
    return response


@admin_bp.route("/create", methods=["POST"])
def create_admin():
    store = get_store()
    # The first admin can be created without a session; after that only
    # signed-in admins may add more.
    if admins.has_admins(store):
        authenticate_request()

    admin = admins.create_admin(store, request_payload())
    current_app.logger.info("Admin created: %s", admin["_id"])
    return (
        jsonify(
            {
                "success": True,
                "message": "Admin created successfully",
                "admin": admins.serialize_admin_summary(admin),
            }
        ),
        201,
    )


@admin_bp.route("", methods=["GET"])
@admin_bp.route("/", methods=["GET"])
@admin_bp.route("/all", methods=["GET"])
@admin_required
def list_admins():
    documents = admins.list_admins(get_store())
    return jsonify({"success": True, "count": len(documents), "admins": documents})


@admin_bp.route("/<admin_id>", methods=["GET"])
@admin_required
def get_admin(admin_id: str):
    admin = admins.get_admin(get_store(), admin_id)
    return jsonify({"success": True, "admin": admins.serialize_admin(admin)})


@admin_bp.route("/<admin_id>", methods=["PUT"])
@admin_required
def update_admin(admin_id: str):
    admin = admins.update_admin(get_store(), admin_id, request_payload())
    current_app.logger.info("Admin updated: %s", admin["_id"])
    return jsonify(
        {
            "success": True,
            "message": "Admin updated successfully",
            "admin": admins.serialize_admin(admin),
        }
    )
