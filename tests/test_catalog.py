"""
Tests for the generic resource handler using the catalog tables.

Categories, types, views and amenities are the simplest resources, so
they exercise the shared create/read/update/delete contract without
any media.
"""

import pytest

CATALOG_PATHS = ["/api/categories", "/api/types", "/api/views", "/api/amenities"]


# =============================================================================
# CREATE
# =============================================================================

def test_create_category_capitalizes_title(client):
    response = client.post("/api/categories", json={"title": "luxury"})

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "New category Luxury created."

    stored = client.get(f"/api/categories/{data['id']}").json()
    assert stored["title"] == "Luxury"


def test_duplicate_title_is_rejected(client):
    assert client.post("/api/categories", json={"title": "luxury"}).status_code == 201

    response = client.post("/api/categories", json={"title": "luxury"})

    assert response.status_code == 409
    assert "already exists" in response.json()["error"]
    assert len(client.get("/api/categories").json()) == 1


def test_duplicate_after_capitalization(client):
    client.post("/api/views", json={"title": "Sea view"})

    response = client.post("/api/views", json={"title": "sea view"})

    assert response.status_code == 409


@pytest.mark.parametrize("body", [{}, {"title": ""}, {"title": "   "}])
def test_missing_title_returns_400_without_insert(client, body):
    response = client.post("/api/types", json=body)

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "All fields required!"
    assert "request_id" in data
    assert client.get("/api/types").status_code == 404


def test_form_body_is_accepted(client):
    response = client.post("/api/amenities", data={"title": "private pool"})

    assert response.status_code == 201
    assert response.json()["message"] == "New amenity Private Pool created."


def test_malformed_json_returns_400(client):
    response = client.post(
        "/api/categories",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400


# =============================================================================
# READ / LIST / SEARCH
# =============================================================================

@pytest.mark.parametrize("path", CATALOG_PATHS)
def test_get_unknown_id_returns_404(client, path):
    response = client.get(f"{path}/does-not-exist")

    assert response.status_code == 404


@pytest.mark.parametrize("path", CATALOG_PATHS)
def test_empty_list_returns_404(client, path):
    response = client.get(path)

    assert response.status_code == 404
    assert response.json()["error"].startswith("No ")


def test_list_respects_limit(client):
    for title in ["villa", "apartment", "townhouse"]:
        client.post("/api/types", json={"title": title})

    response = client.get("/api/types", params={"limit": 2})

    assert response.status_code == 200
    assert len(response.json()) == 2


@pytest.mark.parametrize("limit", [0, 101, "many"])
def test_invalid_limit_returns_400(client, limit):
    client.post("/api/types", json={"title": "villa"})

    response = client.get("/api/types", params={"limit": limit})

    assert response.status_code == 400


def test_search_is_case_insensitive_contains(client):
    for title in ["sea view", "city view", "garden"]:
        client.post("/api/views", json={"title": title})

    response = client.get("/api/views/search", params={"title": "VIEW"})

    assert response.status_code == 200
    assert sorted(item["title"] for item in response.json()) == ["City View", "Sea View"]


def test_search_without_parameters_returns_400(client):
    response = client.get("/api/categories/search")

    assert response.status_code == 400
    assert response.json()["error"] == "No search parameters provided."


def test_search_with_only_limit_returns_400(client):
    response = client.get("/api/categories/search", params={"limit": 5})

    assert response.status_code == 400


def test_search_with_unknown_parameter_returns_400(client):
    response = client.get("/api/categories/search", params={"color": "red"})

    assert response.status_code == 400


def test_search_without_match_returns_404(client):
    client.post("/api/categories", json={"title": "luxury"})

    response = client.get("/api/categories/search", params={"title": "budget"})

    assert response.status_code == 404


# =============================================================================
# UPDATE
# =============================================================================

def test_update_replaces_title(client):
    item_id = client.post("/api/categories", json={"title": "luxury"}).json()["id"]

    response = client.patch(f"/api/categories/{item_id}", json={"title": "ultra luxury"})

    assert response.status_code == 200
    assert response.json() == {"message": "Category Ultra Luxury updated.", "id": item_id}
    assert client.get(f"/api/categories/{item_id}").json()["title"] == "Ultra Luxury"


def test_update_to_existing_title_returns_409(client):
    client.post("/api/categories", json={"title": "luxury"})
    other_id = client.post("/api/categories", json={"title": "budget"}).json()["id"]

    response = client.patch(f"/api/categories/{other_id}", json={"title": "luxury"})

    assert response.status_code == 409
    assert client.get(f"/api/categories/{other_id}").json()["title"] == "Budget"


def test_update_keeping_own_title_is_allowed(client):
    item_id = client.post("/api/categories", json={"title": "luxury"}).json()["id"]

    response = client.patch(f"/api/categories/{item_id}", json={"title": "Luxury"})

    assert response.status_code == 200


def test_update_unknown_id_returns_404(client):
    response = client.patch("/api/categories/missing", json={"title": "luxury"})

    assert response.status_code == 404


def test_update_missing_field_returns_400(client):
    item_id = client.post("/api/categories", json={"title": "luxury"}).json()["id"]

    response = client.patch(f"/api/categories/{item_id}", json={})

    assert response.status_code == 400
    assert client.get(f"/api/categories/{item_id}").json()["title"] == "Luxury"


# =============================================================================
# DELETE
# =============================================================================

def test_delete_twice_returns_200_then_404(client):
    item_id = client.post("/api/categories", json={"title": "luxury"}).json()["id"]

    first = client.delete(f"/api/categories/{item_id}")
    second = client.delete(f"/api/categories/{item_id}")

    assert first.status_code == 200
    assert first.json()["message"] == f"Category Luxury with ID: {item_id} deleted."
    assert second.status_code == 404


# =============================================================================
# ROUTING
# =============================================================================

def test_unmatched_route_returns_404_message(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"message": "404 Not Found"}


def test_responses_carry_request_id(client):
    response = client.get("/api/categories")

    assert "X-Request-ID" in response.headers
