import atexit
import logging
import os

import click
from flask import Flask, current_app, jsonify, request, send_from_directory
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_pymongo import PyMongo
from werkzeug.middleware.proxy_fix import ProxyFix

from sharkshop import admins
from sharkshop.auth import register_token_handlers
from sharkshop.config import Config, ConfigurationError, is_production, require_signing_secret
from sharkshop.errors import ApiError, register_error_handlers
from sharkshop.routes import register_blueprints
from sharkshop.store import Store, get_store


def create_app(config_class=Config, database=None) -> Flask:
    """Create and configure the Flask application.

    ``database`` replaces the Flask-PyMongo connection when given, which is
    how the tests run against an in-memory database.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    require_signing_secret(app.config)

    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")), logging.INFO))

    # Honor proxy headers so secure cookies work behind the hosting proxy.
    trusted_proxy_hops = max(0, int(app.config.get("TRUSTED_PROXY_HOPS") or 0))
    if trusted_proxy_hops:
        app.wsgi_app = ProxyFix(
            app.wsgi_app,
            x_for=trusted_proxy_hops,
            x_proto=trusted_proxy_hops,
            x_host=trusted_proxy_hops,
            x_port=trusted_proxy_hops,
        )

    if not app.config.get("PRODUCT_UPLOAD_FOLDER"):
        app.config["PRODUCT_UPLOAD_FOLDER"] = os.path.join(app.root_path, "uploads")
    os.makedirs(app.config["PRODUCT_UPLOAD_FOLDER"], exist_ok=True)

    # --- Initialize extensions ---
    allowed_origins = list(app.config.get("CORS_DEFAULT_ORIGINS") or [])
    for origin in str(app.config.get("CORS_ALLOWED_ORIGINS") or "").split(","):
        trimmed = origin.strip()
        if trimmed:
            allowed_origins.append(trimmed)
    CORS(app, supports_credentials=True, origins=allowed_origins or "*")

    production = is_production(app.config)
    app.config.setdefault("JWT_COOKIE_SECURE", production)
    app.config.setdefault("JWT_COOKIE_SAMESITE", "None" if production else "Lax")
    jwt_manager = JWTManager(app)
    register_token_handlers(jwt_manager)

    if database is None:
        mongo = PyMongo(app)
        database = mongo.db
        if database is None:
            raise ConfigurationError("MONGO_URI must name a database.")
        atexit.register(mongo.cx.close)

    store = Store(database)
    app.extensions["store"] = store
    store.ensure_indexes(app.logger)

    register_error_handlers(app)
    register_blueprints(app)

    @app.before_request
    def log_request():
        app.logger.info("%s %s", request.method, request.path)

    @app.route("/uploads/<path:filename>")
    def serve_uploaded_file(filename: str):
        return send_from_directory(app.config["PRODUCT_UPLOAD_FOLDER"], filename)

    @app.route("/")
    def index():
        return "Welcome to Shark Nutrition API"

    @app.route("/health")
    def health():
        return {"status": "ok"}, 200

    @app.route("/test")
    def test_database():
        connected = get_store().ping()
        return jsonify(
            {
                "message": "Server is working!",
                "database": "Connected" if connected else "Not Connected",
                "routes": ["GET /test", "POST /api/orders", "GET /products"],
            }
        ), (200 if connected else 503)

    register_commands(app)

    return app


def register_commands(app):
    @app.cli.command("create-admin")
    @click.argument("email")
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option("--name", default="")
    def create_admin_command(email, password, name):
        """Create an admin account."""
        try:
            admin = admins.create_admin(
                get_store(), {"email": email, "password": password, "name": name}
            )
        except ApiError as exc:
            raise click.ClickException(exc.message)
        current_app.logger.info("Admin created from CLI: %s", admin["_id"])
        click.echo(f"Admin {admin['email']} created ({admin['_id']})")
