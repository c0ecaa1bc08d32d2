"""
Tests for menu item endpoints.
"""

import itertools

import pytest

from rest_api.services.storage import uploads


def _item_url(menu_tree, suffix=""):
    return f"/api/items/{menu_tree['bruschetta'].id}{suffix}"


class TestItemCreate:
    def test_create_with_relations(self, client, auth_headers, menu_tree):
        response = client.post(
            f"/api/sections/{menu_tree['antipasti'].id}/items",
            json={
                "name": "Caprese",
                "price": 9,
                "ingredients": ["Mozzarella", "  ", "Pomodoro"],
                "allergens": ["lattosio", "lattosio"],
                "dietary_tags": ["vegetariano"],
            },
            headers=auth_headers,
        )
        assert response.status_code == 201, response.json()
        item = response.json()
        assert item["item_type"] == "food"
        assert item["currency"] == "EUR"
        assert item["display_order"] == 1
        assert sorted(i["name"] for i in item["ingredients"]) == ["Mozzarella", "Pomodoro"]
        assert [a["allergen_code"] for a in item["allergens"]] == ["lattosio"]
        assert [t["tag_code"] for t in item["dietary_tags"]] == ["vegetariano"]

    @pytest.mark.parametrize(
        "body",
        [
            {"name": "X", "item_type": "snack"},
            {"name": "X", "allergens": ["gluten"]},
            {"name": "X", "dietary_tags": ["keto"]},
            {"name": "X", "item_type": "wine", "wine_type": "blue"},
            {"name": "X", "item_type": "beer", "beer_style": "mead"},
        ],
    )
    def test_unknown_codes_rejected(self, client, auth_headers, menu_tree, body):
        response = client.post(
            f"/api/sections/{menu_tree['antipasti'].id}/items", json=body, headers=auth_headers
        )
        assert response.status_code == 400

    def test_food_drops_wine_fields(self, client, auth_headers, menu_tree):
        response = client.post(
            f"/api/sections/{menu_tree['antipasti'].id}/items",
            json={"name": "Olive", "wine_type": "red", "vintage": 2019, "alcohol_content": 12},
            headers=auth_headers,
        )
        item = response.json()
        assert item["wine_type"] is None
        assert item["vintage"] is None
        assert item["alcohol_content"] is None

    def test_wine_keeps_wine_fields(self, client, auth_headers, menu_tree):
        response = client.post(
            f"/api/sections/{menu_tree['dolci'].id}/items",
            json={
                "name": "Passito",
                "item_type": "wine",
                "wine_type": "dessert_wine",
                "vintage": 2019,
                "alcohol_content": 14.5,
                "beer_style": "ipa",
            },
            headers=auth_headers,
        )
        item = response.json()
        assert item["wine_type"] == "dessert_wine"
        assert item["vintage"] == 2019
        assert item["alcohol_content"] == 14.5
        assert item["beer_style"] is None

    def test_foreign_section_forbidden(self, client, other_headers, menu_tree):
        response = client.post(
            f"/api/sections/{menu_tree['antipasti'].id}/items",
            json={"name": "X"},
            headers=other_headers,
        )
        assert response.status_code == 403


class TestItemUpdate:
    def test_changing_type_clears_fields(self, client, auth_headers, menu_tree):
        url = _item_url(menu_tree)
        client.patch(
            url, json={"item_type": "beer", "beer_style": "ipa", "ibu": 40}, headers=auth_headers
        )
        response = client.patch(url, json={"item_type": "food"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["beer_style"] is None
        assert response.json()["ibu"] is None

    def test_null_name_is_ignored(self, client, auth_headers, menu_tree):
        response = client.patch(
            _item_url(menu_tree), json={"name": None, "price": 7}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Bruschetta"
        assert response.json()["price"] == 7

    def test_move_to_other_section(self, client, auth_headers, menu_tree):
        response = client.patch(
            _item_url(menu_tree), json={"section_id": menu_tree["dolci"].id}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["section_id"] == menu_tree["dolci"].id

    def test_delete(self, client, auth_headers, menu_tree):
        assert client.delete(_item_url(menu_tree), headers=auth_headers).status_code == 204
        assert client.get(_item_url(menu_tree), headers=auth_headers).status_code == 404


class TestItemDuplicateAndAvailability:
    def test_duplicate_placed_after_original(self, client, auth_headers, menu_tree):
        client.patch(_item_url(menu_tree), json={"is_featured": True}, headers=auth_headers)

        response = client.post(_item_url(menu_tree, "/duplicate"), json={}, headers=auth_headers)
        assert response.status_code == 201
        copy = response.json()
        assert copy["name"] == "Bruschetta (copia)"
        assert copy["display_order"] == 1
        assert copy["is_featured"] is False
        assert copy["price"] == 6.5
        assert sorted(i["name"] for i in copy["ingredients"]) == ["Pane", "Pomodoro"]
        assert [a["allergen_code"] for a in copy["allergens"]] == ["glutine"]
        assert copy["translations"] == []

    def test_duplicate_shifts_following_items(self, client, auth_headers, menu_tree):
        later = client.post(
            f"/api/sections/{menu_tree['antipasti'].id}/items",
            json={"name": "Olive"},
            headers=auth_headers,
        ).json()
        assert later["display_order"] == 1

        client.post(_item_url(menu_tree, "/duplicate"), json={}, headers=auth_headers)

        items = client.get(
            f"/api/sections/{menu_tree['antipasti'].id}/items", headers=auth_headers
        ).json()
        assert [i["name"] for i in items] == ["Bruschetta", "Bruschetta (copia)", "Olive"]

    def test_availability_toggle(self, client, auth_headers, menu_tree):
        url = _item_url(menu_tree, "/availability")
        assert client.post(url, headers=auth_headers).json()["is_available"] is False
        assert client.post(url, headers=auth_headers).json()["is_available"] is True
        response = client.post(url, json={"is_available": True}, headers=auth_headers)
        assert response.json()["is_available"] is True


class TestItemRelations:
    def test_add_ingredient_goes_last(self, client, auth_headers, menu_tree):
        response = client.post(
            _item_url(menu_tree, "/ingredients"), json={"name": "Basilico"}, headers=auth_headers
        )
        assert response.status_code == 201
        basilico = next(i for i in response.json()["ingredients"] if i["name"] == "Basilico")
        assert basilico["display_order"] == 2
        assert basilico["is_main"] is False

    def test_replace_ingredients(self, client, auth_headers, menu_tree):
        response = client.put(
            _item_url(menu_tree, "/ingredients"),
            json={"names": ["Pane casereccio", "", "Aglio"]},
            headers=auth_headers,
        )
        assert response.status_code == 200
        ingredients = sorted(response.json()["ingredients"], key=lambda i: i["display_order"])
        assert [(i["name"], i["display_order"]) for i in ingredients] == [
            ("Pane casereccio", 0),
            ("Aglio", 1),
        ]

    def test_remove_ingredient(self, client, auth_headers, menu_tree):
        url = _item_url(menu_tree, f"/ingredients/{menu_tree['pomodoro'].id}")
        assert client.delete(url, headers=auth_headers).status_code == 204
        assert client.delete(url, headers=auth_headers).status_code == 404

    def test_allergens(self, client, auth_headers, menu_tree):
        url = _item_url(menu_tree, "/allergens")
        assert client.post(url, json={"allergen_code": "glutine"}, headers=auth_headers).status_code == 409
        assert client.post(url, json={"allergen_code": "gluten"}, headers=auth_headers).status_code == 400

        response = client.post(url, json={"allergen_code": "sesamo"}, headers=auth_headers)
        assert response.status_code == 201
        assert sorted(a["allergen_code"] for a in response.json()["allergens"]) == ["glutine", "sesamo"]

        assert client.delete(f"{url}/sesamo", headers=auth_headers).status_code == 204
        assert client.delete(f"{url}/sesamo", headers=auth_headers).status_code == 404

    def test_dietary_tags(self, client, auth_headers, menu_tree):
        url = _item_url(menu_tree, "/dietary-tags")
        response = client.post(url, json={"tag_code": "vegano"}, headers=auth_headers)
        assert response.status_code == 201
        assert client.post(url, json={"tag_code": "vegano"}, headers=auth_headers).status_code == 409
        assert client.delete(f"{url}/vegano", headers=auth_headers).status_code == 204
        assert client.delete(f"{url}/vegano", headers=auth_headers).status_code == 404

    def test_dietary_tag_translations(self, client, auth_headers, menu_tree):
        client.post(_item_url(menu_tree, "/dietary-tags"), json={"tag_code": "vegano"}, headers=auth_headers)
        url = _item_url(menu_tree, "/dietary-tags/vegano/translations")

        client.put(url, json={"language_code": "en", "display_name": "Vegan"}, headers=auth_headers)
        response = client.put(url, json={"language_code": "en", "display_name": " Plant-based "}, headers=auth_headers)
        assert response.status_code == 200
        tag = response.json()["dietary_tags"][0]
        assert tag["translations"] == [{"language_code": "en", "display_name": "Plant-based"}]

        assert client.delete(f"{url}/en", headers=auth_headers).status_code == 204
        assert client.delete(f"{url}/en", headers=auth_headers).status_code == 404

    @pytest.mark.parametrize(
        "code, body",
        [
            ("vegano", {"language_code": "it", "display_name": "Vegano"}),
            ("vegano", {"language_code": "en", "display_name": "  "}),
            ("piccante", {"language_code": "en", "display_name": "Spicy"}),
        ],
    )
    def test_dietary_tag_translation_rejected(self, client, auth_headers, menu_tree, code, body):
        client.post(_item_url(menu_tree, "/dietary-tags"), json={"tag_code": "vegano"}, headers=auth_headers)
        response = client.put(
            _item_url(menu_tree, f"/dietary-tags/{code}/translations"), json=body, headers=auth_headers
        )
        # An unknown or unattached tag is a 404, a bad value a 400
        assert response.status_code == (404 if code != "vegano" else 400)

    def test_translations(self, client, auth_headers, menu_tree):
        url = _item_url(menu_tree, "/translations")
        response = client.put(
            url,
            json={"language_code": "es", "field_name": "description", "field_value": "Pan tostado"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["translations"] == [
            {"language_code": "es", "field_name": "description", "field_value": "Pan tostado"}
        ]

        assert client.delete(f"{url}/es/description", headers=auth_headers).status_code == 204
        assert client.delete(f"{url}/es/description", headers=auth_headers).status_code == 404


class TestItemImage:
    @pytest.fixture(autouse=True)
    def distinct_timestamps(self, monkeypatch):
        ticks = itertools.count(1_700_000_000_000)
        monkeypatch.setattr(uploads, "timestamp_ms", lambda: next(ticks))

    def test_upload(self, client, auth_headers, menu_tree, owner, fake_storage):
        response = client.post(
            _item_url(menu_tree, "/image"),
            files={"file": ("piatto.webp", b"webp-bytes", "image/webp")},
            headers=auth_headers,
        )
        assert response.status_code == 200, response.json()
        data = response.json()
        item_id = menu_tree["bruschetta"].id
        assert data["path"] == f"{owner.id}/{item_id}/1700000000000.webp"
        assert fake_storage.objects[f"item-images/{data['path']}"] == b"webp-bytes"

        item = client.get(_item_url(menu_tree), headers=auth_headers).json()
        assert item["image_url"] == data["imageUrl"]

    def test_upload_replaces_previous_image(self, client, auth_headers, menu_tree, fake_storage):
        first = client.post(
            _item_url(menu_tree, "/image"),
            files={"file": ("a.png", b"png-bytes", "image/png")},
            headers=auth_headers,
        ).json()["path"]
        second = client.post(
            _item_url(menu_tree, "/image"),
            files={"file": ("b.png", b"other-bytes", "image/png")},
            headers=auth_headers,
        ).json()["path"]

        assert fake_storage.removed == [f"item-images/{first}"]
        assert list(fake_storage.objects) == [f"item-images/{second}"]

    def test_external_url_is_not_removed(self, client, auth_headers, menu_tree, fake_storage):
        client.patch(
            _item_url(menu_tree),
            json={"image_url": "https://cdn.example.com/bruschetta.jpg"},
            headers=auth_headers,
        )
        response = client.post(
            _item_url(menu_tree, "/image"),
            files={"file": ("a.png", b"png-bytes", "image/png")},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert fake_storage.removed == []

    def test_delete_image(self, client, auth_headers, menu_tree, fake_storage):
        path = client.post(
            _item_url(menu_tree, "/image"),
            files={"file": ("a.png", b"png-bytes", "image/png")},
            headers=auth_headers,
        ).json()["path"]

        assert client.delete(_item_url(menu_tree, "/image"), headers=auth_headers).status_code == 204
        assert fake_storage.removed == [f"item-images/{path}"]
        assert client.get(_item_url(menu_tree), headers=auth_headers).json()["image_url"] is None
        assert client.delete(_item_url(menu_tree, "/image"), headers=auth_headers).status_code == 404

    def test_delete_item_removes_image(self, client, auth_headers, menu_tree, fake_storage):
        path = client.post(
            _item_url(menu_tree, "/image"),
            files={"file": ("a.png", b"png-bytes", "image/png")},
            headers=auth_headers,
        ).json()["path"]

        assert client.delete(_item_url(menu_tree), headers=auth_headers).status_code == 204
        assert fake_storage.removed == [f"item-images/{path}"]
        assert fake_storage.objects == {}

    def test_oversized_upload_rejected(self, client, auth_headers, menu_tree, monkeypatch, fake_storage):
        from shared.config.settings import settings

        monkeypatch.setattr(settings, "max_upload_bytes", 4)
        response = client.post(
            _item_url(menu_tree, "/image"),
            files={"file": ("a.png", b"12345", "image/png")},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert fake_storage.objects == {}
