"""
HTTP blueprints, one per resource.
"""
from flask import request


def request_payload():
    """Return the submitted fields from a multipart form or a JSON body."""
    if request.form:
        payload = request.form.to_dict()
        flavors = request.form.getlist("flavor")
        if len(flavors) > 1:
            payload["flavor"] = flavors
        return payload
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def register_blueprints(app):
    from sharkshop.routes.admin import admin_bp
    from sharkshop.routes.categories import categories_bp
    from sharkshop.routes.orders import orders_bp
    from sharkshop.routes.products import products_bp

    app.register_blueprint(admin_bp, url_prefix="/api/admin")
    app.register_blueprint(products_bp, url_prefix="/products")
    app.register_blueprint(categories_bp, url_prefix="/api/categories")
    app.register_blueprint(orders_bp, url_prefix="/api/orders")
