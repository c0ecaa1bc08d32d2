"""
Tests for restaurant endpoints.
"""

import itertools

import pytest

from rest_api.services.storage import uploads


@pytest.fixture
def restaurant(client, auth_headers):
    response = client.post(
        "/api/restaurants",
        json={"name": "Da Mario", "type": "trattoria", "city": "Roma"},
        headers=auth_headers,
    )
    assert response.status_code == 201, response.json()
    return response.json()


class TestRestaurantCrud:
    def test_create_and_list(self, client, auth_headers, restaurant):
        assert restaurant["name"] == "Da Mario"
        assert restaurant["translations"] == []
        assert restaurant["socials"] == []

        response = client.get("/api/restaurants", headers=auth_headers)
        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [restaurant["id"]]

    def test_requires_auth(self, client):
        assert client.get("/api/restaurants").status_code == 401

    def test_unknown_type_rejected(self, client, auth_headers):
        response = client.post(
            "/api/restaurants",
            json={"name": "X", "type": "discoteca"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_internal_image_url_rejected(self, client, auth_headers):
        response = client.post(
            "/api/restaurants",
            json={"name": "X", "type": "bar", "image_url": "http://169.254.169.254/latest"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_update(self, client, auth_headers, restaurant):
        response = client.patch(
            f"/api/restaurants/{restaurant['id']}",
            json={"name": "Da Mario e Figli", "phone": "+39 06 123"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Da Mario e Figli"
        assert data["phone"] == "+39 06 123"
        assert data["type"] == "trattoria"

    def test_update_type_to_null_rejected(self, client, auth_headers, restaurant):
        response = client.patch(
            f"/api/restaurants/{restaurant['id']}",
            json={"type": None},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_other_owner_is_forbidden(self, client, other_headers, restaurant):
        response = client.get(f"/api/restaurants/{restaurant['id']}", headers=other_headers)
        assert response.status_code == 403

    def test_unknown_restaurant(self, client, auth_headers):
        response = client.get("/api/restaurants/missing", headers=auth_headers)
        assert response.status_code == 404

    def test_delete(self, client, auth_headers, restaurant):
        response = client.delete(f"/api/restaurants/{restaurant['id']}", headers=auth_headers)
        assert response.status_code == 204
        assert client.get(f"/api/restaurants/{restaurant['id']}", headers=auth_headers).status_code == 404


class TestRestaurantTranslationsAndSocials:
    def test_upsert_translation_overwrites(self, client, auth_headers, restaurant):
        url = f"/api/restaurants/{restaurant['id']}/translations"
        body = {"language_code": "en", "field_name": "description", "field_value": "Family trattoria"}
        assert client.put(url, json=body, headers=auth_headers).status_code == 200

        body["field_value"] = "Family-run trattoria"
        response = client.put(url, json=body, headers=auth_headers)
        assert response.status_code == 200
        translations = response.json()["translations"]
        assert len(translations) == 1
        assert translations[0]["field_value"] == "Family-run trattoria"

    @pytest.mark.parametrize(
        "body",
        [
            {"language_code": "it", "field_name": "description", "field_value": "x"},
            {"language_code": "xx", "field_name": "description", "field_value": "x"},
            {"language_code": "en", "field_name": "name", "field_value": "x"},
            {"language_code": "en", "field_name": "about", "field_value": "   "},
        ],
    )
    def test_invalid_translation_rejected(self, client, auth_headers, restaurant, body):
        response = client.put(
            f"/api/restaurants/{restaurant['id']}/translations", json=body, headers=auth_headers
        )
        assert response.status_code == 400

    def test_delete_translation(self, client, auth_headers, restaurant):
        base = f"/api/restaurants/{restaurant['id']}/translations"
        client.put(
            base,
            json={"language_code": "de", "field_name": "about", "field_value": "Über uns"},
            headers=auth_headers,
        )
        assert client.delete(f"{base}/de/about", headers=auth_headers).status_code == 204
        assert client.delete(f"{base}/de/about", headers=auth_headers).status_code == 404

    def test_socials(self, client, auth_headers, restaurant):
        base = f"/api/restaurants/{restaurant['id']}/socials"
        response = client.put(
            base, json={"platform": "instagram", "handle": " @damario "}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["socials"] == [{"platform": "instagram", "handle": "@damario"}]

        assert client.put(
            base, json={"platform": "myspace", "handle": "x"}, headers=auth_headers
        ).status_code == 400
        assert client.delete(f"{base}/instagram", headers=auth_headers).status_code == 204
        assert client.delete(f"{base}/instagram", headers=auth_headers).status_code == 404


class TestRestaurantImage:
    @pytest.fixture(autouse=True)
    def distinct_timestamps(self, monkeypatch):
        ticks = itertools.count(1_700_000_000_000)
        monkeypatch.setattr(uploads, "timestamp_ms", lambda: next(ticks))

    def test_upload_replaces_previous_image(self, client, auth_headers, restaurant, fake_storage):
        url = f"/api/restaurants/{restaurant['id']}/image"
        first = client.post(
            url, files={"file": ("a.png", b"png-bytes", "image/png")}, headers=auth_headers
        )
        assert first.status_code == 200, first.json()
        first_path = first.json()["path"]
        assert first_path.startswith(f"{restaurant['owner_id']}/{restaurant['id']}/")
        assert first_path.endswith(".png")
        assert first.json()["imageUrl"].endswith(first_path)

        second = client.post(
            url, files={"file": ("b.jpg", b"jpeg-bytes", "image/jpeg")}, headers=auth_headers
        )
        assert second.status_code == 200
        assert f"restaurant-images/{first_path}" in fake_storage.removed

        detail = client.get(f"/api/restaurants/{restaurant['id']}", headers=auth_headers).json()
        assert detail["image_url"] == second.json()["imageUrl"]

    def test_rejects_non_image(self, client, auth_headers, restaurant, fake_storage):
        response = client.post(
            f"/api/restaurants/{restaurant['id']}/image",
            files={"file": ("a.txt", b"hello", "text/plain")},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert fake_storage.objects == {}

    def test_rejects_empty_file(self, client, auth_headers, restaurant):
        response = client.post(
            f"/api/restaurants/{restaurant['id']}/image",
            files={"file": ("a.png", b"", "image/png")},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_storage_failure_is_500(self, client, auth_headers, restaurant, fake_storage):
        fake_storage.upload_status = 500
        response = client.post(
            f"/api/restaurants/{restaurant['id']}/image",
            files={"file": ("a.png", b"png", "image/png")},
            headers=auth_headers,
        )
        assert response.status_code == 500

    def test_delete_image(self, client, auth_headers, restaurant, fake_storage):
        url = f"/api/restaurants/{restaurant['id']}/image"
        path = client.post(
            url, files={"file": ("a.png", b"png", "image/png")}, headers=auth_headers
        ).json()["path"]

        assert client.delete(url, headers=auth_headers).status_code == 204
        assert f"restaurant-images/{path}" in fake_storage.removed
        assert client.delete(url, headers=auth_headers).status_code == 404

    def test_json_body_on_upload_route_is_rejected(self, client, auth_headers, restaurant):
        response = client.post(
            f"/api/restaurants/{restaurant['id']}/image",
            content=b"hello",
            headers={**auth_headers, "Content-Type": "text/plain"},
        )
        assert response.status_code == 415
