"""
Tests for item auto-complete and AI image generation.
"""

import json

import pytest

from shared.config.settings import settings

AUTOCOMPLETE = "/api/items/autocomplete"
GENERATE = "/api/images/generate"


class TestAutocomplete:
    def test_suggestion_is_sanitised(self, client, auth_headers, fake_llm):
        fake_llm.chat_reply = json.dumps({
            "description": "  Pane abbrustolito con pomodoro fresco e basilico.  ",
            "about": "Nata come cibo contadino.",
            "ingredients": ["Pane", " ", "Pomodoro", *[f"Extra {n}" for n in range(12)]],
            "allergens": ["glutine", "gluten", "glutine", 7],
            "calories": 5000,
        })

        response = client.post(
            AUTOCOMPLETE, json={"itemName": "Bruschetta", "itemType": "food"}, headers=auth_headers
        )
        assert response.status_code == 200, response.json()
        data = response.json()
        assert data["description"] == "Pane abbrustolito con pomodoro fresco e basilico."
        assert data["about"] == "Nata come cibo contadino."
        assert len(data["ingredients"]) == 10
        assert data["ingredients"][:2] == ["Pane", "Pomodoro"]
        assert data["allergens"] == ["glutine"]
        assert data["calories"] == 2000

        [call] = fake_llm.chat_calls
        assert call["response_format"] == {"type": "json_object"}
        assert "Bruschetta" in call["messages"][-1]["content"]

    @pytest.mark.parametrize("calories, expected", [("320", 320), (-5, 0), ("molte", 0), (None, 0)])
    def test_calories_clamped(self, client, auth_headers, fake_llm, calories, expected):
        fake_llm.chat_reply = json.dumps(
            {"description": "Una descrizione abbastanza lunga.", "calories": calories}
        )
        response = client.post(AUTOCOMPLETE, json={"itemName": "Olive"}, headers=auth_headers)
        assert response.json()["calories"] == expected

    @pytest.mark.parametrize(
        "reply",
        ["not json", "[1, 2]", json.dumps({"description": "Corta"}), ""],
    )
    def test_unusable_model_output(self, client, auth_headers, fake_llm, reply):
        fake_llm.chat_reply = reply
        response = client.post(AUTOCOMPLETE, json={"itemName": "Olive"}, headers=auth_headers)
        assert response.status_code == 502

    def test_missing_name_rejected(self, client, auth_headers, fake_llm):
        response = client.post(AUTOCOMPLETE, json={"itemName": "  "}, headers=auth_headers)
        assert response.status_code == 400
        assert fake_llm.chat_calls == []

    def test_unknown_item_type_rejected(self, client, auth_headers, fake_llm):
        response = client.post(
            AUTOCOMPLETE, json={"itemName": "Olive", "itemType": "snack"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert fake_llm.chat_calls == []


class TestImageGeneration:
    def _body(self, owner, **extra):
        return {"prompt": "Tiramisù in un bicchiere", "userId": owner.id, **extra}

    def test_text_to_image_is_stored(self, client, auth_headers, owner, fake_llm, fake_storage):
        response = client.post(
            GENERATE, json=self._body(owner, style="top_view"), headers=auth_headers
        )
        assert response.status_code == 200, response.json()
        data = response.json()
        assert data["style"] == "top_view"
        assert data["prompt"].startswith("Tiramisù in un bicchiere. Style: top-down view")
        assert data["prompt"].endswith("High quality food photography for restaurant menu.")

        [(key, content)] = fake_storage.objects.items()
        assert key.startswith(f"item-images/generated/{owner.id}/temp/")
        assert key.endswith("-ai.png")
        assert content.startswith(b"\x89PNG")
        assert data["imageUrl"].endswith(key)
        assert fake_llm.paths() == ["/v1/images/generations"]

    def test_default_style_label(self, client, auth_headers, owner):
        response = client.post(GENERATE, json=self._body(owner), headers=auth_headers)
        assert response.json()["style"] == "default"

    def test_reference_image_uses_variation(self, client, auth_headers, owner, fake_llm):
        response = client.post(
            GENERATE,
            json=self._body(owner, referenceImageUrl="https://cdn.test/ref.png"),
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert fake_llm.paths() == ["/ref.png", "/v1/images/variations"]

        form = fake_llm.requests[-1].content
        assert f'name="model"\r\n\r\n{settings.image_model}\r\n'.encode() in form
        assert f'name="user"\r\n\r\n{owner.id}\r\n'.encode() in form

    def test_variation_failure_falls_back(self, client, auth_headers, owner, fake_llm):
        fake_llm.variation_status = 400
        response = client.post(
            GENERATE,
            json=self._body(owner, referenceImageUrl="https://cdn.test/ref.png"),
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert fake_llm.paths()[-1] == "/v1/images/generations"

    def test_item_image_path(self, client, auth_headers, owner, menu_tree, fake_storage):
        item_id = menu_tree["tiramisu"].id
        response = client.post(GENERATE, json=self._body(owner, itemId=item_id), headers=auth_headers)
        assert response.status_code == 200
        [key] = fake_storage.objects
        assert key.startswith(f"item-images/generated/{owner.id}/{item_id}/")

    def test_other_user_id_forbidden(self, client, auth_headers, owner, other_owner, fake_llm):
        response = client.post(GENERATE, json=self._body(other_owner), headers=auth_headers)
        assert response.status_code == 403
        assert fake_llm.requests == []

    def test_foreign_item_forbidden(self, client, other_headers, other_owner, menu_tree, fake_llm):
        response = client.post(
            GENERATE,
            json=self._body(other_owner, itemId=menu_tree["tiramisu"].id),
            headers=other_headers,
        )
        assert response.status_code == 403
        assert fake_llm.requests == []

    @pytest.mark.parametrize(
        "extra",
        [
            {"prompt": " "},
            {"style": "cubist"},
            {"size": "10x10"},
            {"quality": "ultra"},
            {"background": "plaid"},
            {"referenceImageUrl": "http://127.0.0.1/ref.png"},
        ],
    )
    def test_invalid_requests(self, client, auth_headers, owner, fake_llm, extra):
        response = client.post(GENERATE, json=self._body(owner, **extra), headers=auth_headers)
        assert response.status_code == 400
        assert fake_llm.requests == []

    def test_generation_failure(self, client, auth_headers, owner, fake_llm, fake_storage):
        fake_llm.image_status = 500
        response = client.post(GENERATE, json=self._body(owner), headers=auth_headers)
        assert response.status_code == 500
        assert fake_storage.objects == {}
