"""
Shark Nutrition store backend.

Catalog, categories, orders and admin authentication over MongoDB, served as
a JSON API by a Flask application factory.
"""
from sharkshop.app import create_app

__all__ = ["create_app"]
