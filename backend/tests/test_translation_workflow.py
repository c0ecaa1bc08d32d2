"""
End-to-end translation workflow: collect -> select -> dispatch into the
running app's batch endpoint.
"""

import json

import httpx
import pytest
from sqlalchemy import select

from rest_api.main import app
from rest_api.models import Menu, MenuItem, MenuItemTranslation, MenuSection
from rest_api.services.translation import (
    BatchDispatcher,
    MenuApiClient,
    TranslationSelection,
    collect_units,
)


@pytest.fixture
def primavera(db_session, owner):
    menu = Menu(owner_id=owner.id, name="Menu Primavera")
    db_session.add(menu)
    db_session.flush()
    antipasti = MenuSection(menu_id=menu.id, name="Antipasti", display_order=0)
    db_session.add(antipasti)
    db_session.flush()
    bruschetta = MenuItem(
        section_id=antipasti.id,
        name="Bruschetta",
        description="Pane tostato con pomodoro",
        price=6.5,
        display_order=0,
    )
    db_session.add(bruschetta)
    db_session.commit()
    return {"menu": menu, "bruschetta": bruschetta}


class TestMenuTranslationWorkflow:
    async def test_single_item_description_into_english(self, client, primavera, fake_llm, db_session):
        menu_id = primavera["menu"].id
        bruschetta_id = primavera["bruschetta"].id
        fake_llm.chat_reply = "Toasted bread with tomato"

        batch_bodies: list[dict] = []
        batch_replies: list[dict] = []

        async def record_request(request: httpx.Request) -> None:
            if request.url.path == "/api/translation/batch":
                batch_bodies.append(json.loads(request.content))

        async def record_response(response: httpx.Response) -> None:
            if response.request.url.path == "/api/translation/batch":
                await response.aread()
                batch_replies.append(response.json())

        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://testserver",
            event_hooks={"request": [record_request], "response": [record_response]},
        ) as http:
            api = MenuApiClient(http)
            await api.login("owner@test.com", "testpass123")
            menu = await api.get_menu(menu_id)
            items = await api.items_by_section(menu_id)

            units = await collect_units(menu, menu.sections, items, api.load_item)
            selection = TranslationSelection(units, languages=["en"])
            selection.deselect_all()
            selection.toggle_unit(f"item-desc-{bruschetta_id}")

            result = await BatchDispatcher(http).dispatch(selection, menu_id)

        assert result.success
        assert result.completed == 1
        assert batch_bodies == [
            {
                "text": "Pane tostato con pomodoro",
                "languageCode": "en",
                "type": "item_description",
                "entityId": bruschetta_id,
                "menuId": menu_id,
            }
        ]
        assert batch_replies == [{"translatedText": "Toasted bread with tomato", "saved": True}]

        rows = db_session.scalars(
            select(MenuItemTranslation).where(MenuItemTranslation.item_id == bruschetta_id)
        ).all()
        assert [(r.language_code, r.field_name, r.field_value) for r in rows] == [
            ("en", "description", "Toasted bread with tomato")
        ]
