"""
Tests for flattening a menu into translatable units.
"""

from types import SimpleNamespace as NS

import pytest

from rest_api.services.translation.collector import collect_units, group_by_kind


def _menu():
    menu = NS(id="m1", name="Cena", description="Menu della sera")
    antipasti = NS(id="s1", name="Antipasti", description="Per iniziare")
    dolci = NS(id="s2", name="Dolci", description="  ")
    items = {
        "s1": [NS(id="i1", name="Bruschetta", description="Pane tostato")],
        "s2": [NS(id="i2", name="Tiramisù", description=None)],
    }
    relations = {
        "i1": NS(
            ingredients=[NS(id="g1", name="Pane"), NS(id="g2", name="Pomodoro")],
            allergens=[NS(id="a1", allergen_code="glutine")],
        ),
        "i2": NS(ingredients=[], allergens=[]),
    }
    return menu, [antipasti, dolci], items, relations


def _loader(relations, calls=None):
    async def load(item_id):
        if calls is not None:
            calls.append(item_id)
        return relations[item_id]

    return load


class TestCollectUnits:
    async def test_traversal_order_and_ids(self):
        menu, sections, items, relations = _menu()
        units = await collect_units(menu, sections, items, _loader(relations))

        assert [u.id for u in units] == [
            "menu-name-m1",
            "menu-desc-m1",
            "section-name-s1",
            "section-desc-s1",
            "item-name-i1",
            "item-desc-i1",
            "ingredient-g1",
            "ingredient-g2",
            "allergen-a1",
            "section-name-s2",
            "item-name-i2",
        ]

    async def test_unit_fields(self):
        menu, sections, items, relations = _menu()
        units = {u.id: u for u in await collect_units(menu, sections, items, _loader(relations))}

        name = units["item-name-i1"]
        assert name.kind == "item_name"
        assert name.content == "Bruschetta"
        assert name.entity_id == "i1"
        assert name.breadcrumb == "Antipasti → Bruschetta"

        allergen = units["allergen-a1"]
        assert allergen.content == "Glutine"
        assert allergen.entity_id == "a1"
        assert allergen.breadcrumb == "Antipasti → Bruschetta"

        assert units["menu-name-m1"].breadcrumb is None
        assert units["section-desc-s1"].breadcrumb == "Antipasti"

    async def test_items_loaded_once_in_order(self):
        menu, sections, items, relations = _menu()
        calls = []
        await collect_units(menu, sections, items, _loader(relations, calls))
        assert calls == ["i1", "i2"]

    async def test_failed_load_skips_only_that_item(self):
        menu, sections, items, relations = _menu()

        async def load(item_id):
            if item_id == "i1":
                raise RuntimeError("connection reset")
            return relations[item_id]

        ids = [u.id for u in await collect_units(menu, sections, items, load)]
        assert "item-name-i1" in ids
        assert "item-desc-i1" in ids
        assert not any(i.startswith(("ingredient-", "allergen-")) for i in ids)
        assert "item-name-i2" in ids

    async def test_unknown_allergen_code_used_as_label(self):
        menu = NS(id="m", name="M", description=None)
        section = NS(id="s", name="S", description=None)
        items = {"s": [NS(id="i", name="I", description=None)]}

        async def load(item_id):
            return NS(ingredients=None, allergens=[NS(id="a", allergen_code="zafferano")])

        units = await collect_units(menu, [section], items, load)
        assert units[-1].content == "zafferano"

    async def test_empty_menu(self):
        menu = NS(id="m", name="Vuoto", description="")
        units = await collect_units(menu, [], {}, _loader({}))
        assert [u.id for u in units] == ["menu-name-m"]


class TestGroupByKind:
    @pytest.mark.parametrize("reverse", [False, True])
    async def test_groups_follow_first_seen_order(self, reverse):
        menu, sections, items, relations = _menu()
        units = await collect_units(menu, sections, items, _loader(relations))
        if reverse:
            units = list(reversed(units))

        groups = group_by_kind(units)
        kinds = [g.kind for g in groups]
        assert len(kinds) == len(set(kinds)) == 8
        assert kinds[0] == units[0].kind

        ingredients = next(g for g in groups if g.kind == "ingredient")
        assert ingredients.label == "Ingredients"
        assert len(ingredients.units) == 2
