"""
Category routes. Reads are public; writes require an admin session.
"""
from flask import Blueprint, current_app, jsonify

from sharkshop import catalog
from sharkshop.auth import admin_required
from sharkshop.routes import request_payload
from sharkshop.store import get_store

categories_bp = Blueprint("categories", __name__)


@categories_bp.route("", methods=["GET"])
@categories_bp.route("/", methods=["GET"])
def list_categories():
    return jsonify({"success": True, "categories": catalog.list_categories(get_store())})


@categories_bp.route("/<category_id>", methods=["GET"])
def get_category(category_id: str):
    category = catalog.get_category(get_store(), category_id)
    return jsonify({"success": True, "category": catalog.serialize_category(category)})


@categories_bp.route("", methods=["POST"])
@categories_bp.route("/", methods=["POST"])
@admin_required
def create_category():
    category = catalog.create_category(get_store(), request_payload())
    current_app.logger.info("Category created: %s (%s)", category["name"], category["_id"])
    return (
        jsonify(
            {
                "success": True,
                "message": "Category created successfully",
                "category": catalog.serialize_category(category),
            }
        ),
        201,
    )


@categories_bp.route("/<category_id>", methods=["PUT"])
@admin_required
def update_category(category_id: str):
    category = catalog.update_category(get_store(), category_id, request_payload())
    current_app.logger.info("Category updated: %s (%s)", category["name"], category["_id"])
    return jsonify(
        {
            "success": True,
            "message": "Category updated successfully",
            "category": catalog.serialize_category(category),
        }
    )


@categories_bp.route("/<category_id>", methods=["DELETE"])
@admin_required
def delete_category(category_id: str):
    deleted = catalog.delete_category(get_store(), category_id)
    current_app.logger.info("Category deleted: %s (%s)", deleted.get("name"), deleted["_id"])
    return jsonify({"success": True, "message": "Category deleted successfully"})
