from uuid import uuid4

import mongomock
import pytest

from sharkshop import create_app
from sharkshop.config import TestConfig

ADMIN_EMAIL = "owner@sharknutrition.test"
ADMIN_PASSWORD = "s3cret-pass"


@pytest.fixture()
def make_app(tmp_path):
    def factory(**overrides):
        settings = {"PRODUCT_UPLOAD_FOLDER": str(tmp_path / "uploads"), **overrides}
        config_class = type("ConfiguredTestConfig", (TestConfig,), settings)
        database = mongomock.MongoClient()[f"sharknutrition_{uuid4().hex}"]
        return create_app(config_class, database=database)
    return factory


@pytest.fixture()
def app(make_app):
    return make_app()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store(app):
    return app.extensions["store"]


@pytest.fixture()
def admin(app):
    response = app.test_client().post(
        "/api/admin/create",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD, "name": "Store Owner"},
    )
    assert response.status_code == 201
    return response.get_json()["admin"]


@pytest.fixture()
def token(app, admin):
    response = app.test_client().post(
        "/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return response.get_json()["token"]


@pytest.fixture()
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_category(client, auth_headers):
    def factory(name, is_active=True, **fields):
        response = client.post(
            "/api/categories",
            json={"name": name, "isActive": is_active, **fields},
            headers=auth_headers,
        )
        assert response.status_code == 201, response.get_json()
        return response.get_json()["category"]
    return factory
