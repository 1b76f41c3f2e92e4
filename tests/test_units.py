"""Tests for sale and rent units nested under a property."""

from conftest import image_files, media_path, unit_form


def test_create_under_missing_property_returns_404(client):
    response = client.post(
        "/api/properties/missing/sale-units",
        data=unit_form(rp_sqft="1800", total_price="1710000"),
        files=image_files(),
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Property not found!"


def test_flat_create_is_not_routed(client, property_id):
    response = client.post("/api/sale-units", data=unit_form(rp_sqft="1", total_price="1"))

    assert response.status_code == 405


def test_get_includes_property(client, storage, property_id, sale_unit_id):
    data = client.get(f"/api/sale-units/{sale_unit_id}").json()

    assert data["property_id"] == property_id
    assert data["property"]["title"] == "Marina Heights"
    assert data["total_price"] == 1710000
    assert [view["title"] for view in data["views"]] == ["Sea View"]
    assert len(data["images"]) == 1
    assert media_path(storage, "images/sales", "Marina Heights 1201").is_dir()


def test_nested_list_only_returns_own_units(client, agent_id, property_id, sale_unit_id):
    other_form = {
        "title": "Palm Residences",
        "owner": "Nakheel",
        "city": "Dubai",
        "country": "UAE",
        "location": "Palm Jumeirah",
        "category": "Luxury",
        "type": "Villa",
        "area": "8000",
        "price": "9000000",
        "map_url": "https://maps.example.com/palm",
        "agent_id": agent_id,
    }
    other_id = client.post("/api/properties", data=other_form, files=image_files()).json()["id"]

    own = client.get(f"/api/properties/{property_id}/sale-units")
    other = client.get(f"/api/properties/{other_id}/sale-units")

    assert [unit["id"] for unit in own.json()] == [sale_unit_id]
    assert other.status_code == 404


def test_nested_search(client, property_id, sale_unit_id):
    base = f"/api/properties/{property_id}/sale-units/search"

    assert client.get(base, params={"bedrooms": "2"}).status_code == 200
    assert client.get(base, params={"bedrooms": "3"}).status_code == 404
    assert client.get(base, params={"rent_price": "10"}).status_code == 400


def test_flat_search_across_properties(client, rent_unit_id):
    response = client.get("/api/rent-units/search", params={"rent_price": "150000", "floor": "9"})

    assert response.status_code == 200
    assert response.json()[0]["id"] == rent_unit_id


def test_update_renames_gallery(client, storage, property_id, sale_unit_id):
    form = unit_form("Marina Heights 1202", rp_sqft="1900", total_price="1805000")

    response = client.patch(f"/api/sale-units/{sale_unit_id}", data=form)

    assert response.status_code == 200
    assert media_path(storage, "images/sales", "Marina Heights 1202").is_dir()
    assert not media_path(storage, "images/sales", "Marina Heights 1201").exists()
    data = client.get(f"/api/sale-units/{sale_unit_id}").json()
    assert data["property_id"] == property_id
    assert data["rp_sqft"] == 1900


def test_duplicate_title_returns_409(client, property_id, sale_unit_id):
    response = client.post(
        f"/api/properties/{property_id}/sale-units",
        data=unit_form(rp_sqft="1800", total_price="1710000"),
        files=image_files(),
    )

    assert response.status_code == 409


def test_delete_unit_unblocks_property(client, storage, property_id, rent_unit_id):
    assert client.delete(f"/api/properties/{property_id}").status_code == 403

    response = client.delete(f"/api/rent-units/{rent_unit_id}")

    assert response.status_code == 200
    assert not media_path(storage, "images/rents", "Marina Heights 905").exists()
    assert client.delete(f"/api/properties/{property_id}").status_code == 200
