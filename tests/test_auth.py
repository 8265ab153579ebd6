from datetime import timedelta

import pytest

from sharkshop.tokens import issue_token


def test_admin_route_without_token_is_rejected_before_handler(client, store, monkeypatch):
    def fail_if_called(*args, **kwargs):
        raise AssertionError("handler logic ran for an unauthenticated request")

    monkeypatch.setattr("sharkshop.products.create_product", fail_if_called)

    response = client.post("/products", json={})

    assert response.status_code == 401
    body = response.get_json()
    assert body["success"] is False
    assert body["code"] == "unauthenticated"
    assert store.products.count_documents({}) == 0


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/admin/verify"),
        ("get", "/api/admin/"),
        ("get", "/api/admin/all"),
        ("post", "/products"),
        ("put", "/products/PROD-1"),
        ("delete", "/products/PROD-1"),
        ("post", "/api/categories"),
        ("put", "/api/categories/64b000000000000000000001"),
        ("delete", "/api/categories/64b000000000000000000001"),
        ("get", "/api/orders"),
    ],
)
def test_protected_routes_require_authentication(client, method, path):
    response = getattr(client, method)(path)
    assert response.status_code == 401
    assert response.get_json()["code"] == "unauthenticated"


@pytest.mark.parametrize(
    "path",
    ["/products", "/products/getAllProducts", "/products/stats/count", "/api/categories", "/api/orders/stats/count"],
)
def test_public_reads_do_not_require_authentication(client, path):
    assert client.get(path).status_code == 200


def test_bearer_header_is_accepted(client, auth_headers, admin):
    response = client.get("/api/admin/verify", headers=auth_headers)

    assert response.status_code == 200
    claims = response.get_json()["admin"]
    assert claims["id"] == admin["id"]
    assert claims["isAdmin"] is True


def test_invalid_and_expired_tokens_share_one_generic_error(app, client):
    with app.app_context():
        expired = issue_token("abc", "owner@example.com", True, expires_delta=timedelta(seconds=-1))

    expired_response = client.get("/api/admin/verify", headers={"Authorization": f"Bearer {expired}"})
    garbage_response = client.get("/api/admin/verify", headers={"Authorization": "Bearer garbage"})

    assert expired_response.status_code == garbage_response.status_code == 401
    assert expired_response.get_json() == garbage_response.get_json()


def test_token_without_admin_flag_is_rejected(app, client):
    with app.app_context():
        token = issue_token("abc", "shopper@example.com", False)

    response = client.get("/api/admin/verify", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_non_bearer_authorization_scheme_is_ignored(client, token):
    response = client.get("/api/admin/verify", headers={"Authorization": f"Basic {token}"})
    assert response.status_code == 401
    assert response.get_json()["error"] == "Authentication required"


def test_cookie_is_checked_before_header(app, token):
    client = app.test_client()
    client.set_cookie("adminToken", token)

    response = client.get("/api/admin/verify", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 200


def test_cookie_session_can_write_without_extra_headers(client, token):
    client.set_cookie("adminToken", token)

    response = client.post("/api/categories", json={"name": "Snacks"})
    assert response.status_code == 201


def test_invalid_cookie_wins_over_valid_header(app, token):
    client = app.test_client()
    client.set_cookie("adminToken", "garbage")

    response = client.get("/api/admin/verify", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
