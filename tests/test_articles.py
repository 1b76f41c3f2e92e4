"""Tests for articles and their galleries."""

import pytest

from conftest import image_files, media_path

pytestmark = pytest.mark.media

ARTICLE = {
    "title": "Buying Off Plan",
    "description": "What to check before you sign",
    "body": "Escrow accounts, payment plans and handover dates.",
}


def test_create_and_read(client, storage):
    response = client.post("/api/articles", data=ARTICLE, files=image_files(count=2))

    assert response.status_code == 201
    data = client.get(f"/api/articles/{response.json()['id']}").json()
    assert data["title"] == "Buying Off Plan"
    assert len(data["images"]) == 2
    assert len(list(media_path(storage, "images/articles", "Buying Off Plan").iterdir())) == 2


def test_gallery_is_required(client):
    response = client.post("/api/articles", data=ARTICLE)

    assert response.status_code == 400


def test_search_body(client):
    client.post("/api/articles", data=ARTICLE, files=image_files())

    assert client.get("/api/articles/search", params={"body": "escrow"}).status_code == 200


def test_delete_removes_gallery(client, storage):
    article_id = client.post("/api/articles", data=ARTICLE, files=image_files()).json()["id"]

    assert client.delete(f"/api/articles/{article_id}").status_code == 200
    assert not media_path(storage, "images/articles", "Buying Off Plan").exists()
