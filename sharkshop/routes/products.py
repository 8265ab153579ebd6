"""
Product catalog routes. Reads are public; writes require an admin session.
"""
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import get_jwt

from sharkshop import products
from sharkshop.auth import admin_required
from sharkshop.routes import request_payload
from sharkshop.store import get_store
from sharkshop.uploads import remove_product_image, save_product_image

products_bp = Blueprint("products", __name__)


def _uploaded_image():
    if not request.files:
        return None
    return save_product_image(request.files.get("image"))


@products_bp.route("", methods=["GET"])
@products_bp.route("/", methods=["GET"])
def list_products():
    category = request.args.get("category", "").strip()
    return jsonify(products.list_products(get_store(), category or None))


@products_bp.route("/getAllProducts", methods=["GET"])
def list_all_products():
    return jsonify({"success": True, "products": products.list_all_products(get_store())})


@products_bp.route("/stats/count", methods=["GET"])
def count_products():
    return jsonify({"success": True, "count": products.count_products(get_store())})


@products_bp.route("/<product_id>", methods=["GET"])
def get_product(product_id: str):
    product = products.get_product(get_store(), product_id)
    return jsonify(products.serialize_product(product))


@products_bp.route("", methods=["POST"])
@products_bp.route("/", methods=["POST"])
@admin_required
def create_product():
    payload = request_payload()
    image = _uploaded_image()
    try:
        product = products.create_product(get_store(), payload, image=image)
    except Exception:
        remove_product_image(image)
        raise

    current_app.logger.info(
        "Product %s created by %s in category %s",
        product["product_id"],
        get_jwt().get("email"),
        product["category"],
    )
    return (
        jsonify(
            {
                "success": True,
                "message": "Product added successfully",
                "product": products.serialize_product(product),
            }
        ),
        201,
    )


@products_bp.route("/<product_id>", methods=["PUT"])
@admin_required
def update_product(product_id: str):
    payload = request_payload()
    image = _uploaded_image()
    try:
        previous, updated = products.update_product(get_store(), product_id, payload, image=image)
    except Exception:
        remove_product_image(image)
        raise

    if image and previous.get("image") != updated.get("image"):
        remove_product_image(previous.get("image"))

    current_app.logger.info("Product %s updated by %s", updated["product_id"], get_jwt().get("email"))
    return jsonify({"success": True, "product": products.serialize_product(updated)})


@products_bp.route("/<product_id>", methods=["DELETE"])
@admin_required
def delete_product(product_id: str):
    removed = products.delete_product(get_store(), product_id)
    remove_product_image(removed.get("image"))

    current_app.logger.info("Product %s deleted by %s", removed.get("product_id"), get_jwt().get("email"))
    return jsonify({"success": True, "message": "Product deleted successfully"})
