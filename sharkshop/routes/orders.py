from flask import Blueprint, current_app, jsonify

from sharkshop import orders
from sharkshop.auth import admin_required
from sharkshop.routes import request_payload
from sharkshop.store import get_store

orders_bp = Blueprint("orders", __name__)


@orders_bp.route("", methods=["POST"])
@orders_bp.route("/", methods=["POST"])
def create_order():
    order = orders.create_order(get_store(), request_payload())
    current_app.logger.info("Order %s placed by %s", order["_id"], order.get("email"))
    return (
        jsonify(
            {
                "success": True,
                "message": "Order placed successfully",
                "data": orders.serialize_order(order),
            }
        ),
        201,
    )


@orders_bp.route("", methods=["GET"])
@orders_bp.route("/", methods=["GET"])
@admin_required
def list_orders():
    return jsonify({"success": True, "orders": orders.list_orders(get_store())})


@orders_bp.route("/stats/count", methods=["GET"])
def count_orders():
    return jsonify({"success": True, "count": orders.count_orders(get_store())})
