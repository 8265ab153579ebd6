def test_create_category_normalizes_name(client, auth_headers):
    response = client.post(
        "/api/categories",
        json={"name": "  Pre Workout ", "description": " Energy ", "image": " /img/pre.png "},
        headers=auth_headers,
    )

    assert response.status_code == 201
    category = response.get_json()["category"]
    assert category["name"] == "pre workout"
    assert category["description"] == "Energy"
    assert category["image"] == "/img/pre.png"
    assert category["isActive"] is True


def test_create_category_requires_name(client, auth_headers):
    response = client.post("/api/categories", json={"name": "   "}, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json()["field"] == "name"


def test_duplicate_names_conflict_case_insensitively(client, auth_headers, make_category):
    make_category("Snacks")

    response = client.post("/api/categories", json={"name": " SNACKS"}, headers=auth_headers)

    assert response.status_code == 400
    body = response.get_json()
    assert body["code"] == "conflict"
    assert body["error"] == "Category with this name already exists"


def test_update_allows_own_name_but_not_anothers(client, auth_headers, make_category):
    snacks = make_category("Snacks")
    make_category("Protein")

    own = client.put(f"/api/categories/{snacks['id']}", json={"name": "SNACKS"}, headers=auth_headers)
    taken = client.put(f"/api/categories/{snacks['id']}", json={"name": "protein"}, headers=auth_headers)

    assert own.status_code == 200
    assert taken.status_code == 400
    assert taken.get_json()["code"] == "conflict"


def test_update_parses_string_active_flag(client, auth_headers, make_category):
    category = make_category("Snacks")

    response = client.put(
        f"/api/categories/{category['id']}", json={"isActive": "false"}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.get_json()["category"]["isActive"] is False


def test_update_rejects_unparseable_active_flag(client, auth_headers, make_category):
    category = make_category("Snacks")

    response = client.put(
        f"/api/categories/{category['id']}", json={"isActive": "sometimes"}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.get_json()["field"] == "isActive"


def test_public_reads(client, make_category):
    category = make_category("Snacks")

    listing = client.get("/api/categories").get_json()
    single = client.get(f"/api/categories/{category['id']}")

    assert [entry["name"] for entry in listing["categories"]] == ["snacks"]
    assert single.status_code == 200
    assert single.get_json()["category"]["name"] == "snacks"


def test_missing_and_invalid_category_ids(client, auth_headers):
    assert client.get("/api/categories/64b000000000000000000001").status_code == 404
    assert client.get("/api/categories/nope").status_code == 400
    assert client.delete("/api/categories/64b000000000000000000001", headers=auth_headers).status_code == 404
    assert (
        client.put(
            "/api/categories/64b000000000000000000001", json={"name": "x"}, headers=auth_headers
        ).status_code
        == 404
    )


def test_delete_category(client, auth_headers, make_category):
    category = make_category("Snacks")

    response = client.delete(f"/api/categories/{category['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert client.get(f"/api/categories/{category['id']}").status_code == 404
