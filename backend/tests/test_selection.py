"""
Tests for the unit / language selection model.
"""

import pytest

from rest_api.services.translation.collector import TranslatableUnit
from rest_api.services.translation.selection import TranslationSelection
from shared.utils.exceptions import InvalidCodeError


@pytest.fixture
def units():
    return [
        TranslatableUnit("menu-name-m", "menu_name", "Cena", "m", "Menu name"),
        TranslatableUnit("section-name-s", "section_name", "Antipasti", "s", "Antipasti", "Antipasti"),
        TranslatableUnit("item-name-a", "item_name", "Bruschetta", "a", "Bruschetta", "Antipasti → Bruschetta"),
        TranslatableUnit("item-name-b", "item_name", "Olive", "b", "Olive", "Antipasti → Olive"),
        TranslatableUnit("item-desc-a", "item_description", "Pane tostato", "a", "Bruschetta", "Antipasti → Bruschetta"),
        TranslatableUnit("ingredient-g", "ingredient", "Pane", "g", "Pane", "Antipasti → Bruschetta"),
    ]


class TestDefaults:
    def test_names_start_unselected(self, units):
        selection = TranslationSelection(units)
        assert [u.id for u in selection.selected_units] == ["item-desc-a", "ingredient-g"]
        assert selection.selected_count == 2
        assert selection.total_count == 6

    def test_english_is_default_language(self, units):
        selection = TranslationSelection(units)
        assert selection.languages == ["en"]
        assert selection.pair_count == 2

    def test_explicit_languages_keep_order_without_duplicates(self, units):
        selection = TranslationSelection(units, ["de", "fr", "de"])
        assert selection.languages == ["de", "fr"]

    @pytest.mark.parametrize("code", ["it", "xx", ""])
    def test_invalid_language_rejected(self, units, code):
        with pytest.raises(InvalidCodeError):
            TranslationSelection(units, [code])


class TestToggles:
    def test_toggle_unit(self, units):
        selection = TranslationSelection(units)
        selection.toggle_unit("item-name-a")
        assert selection.is_selected("item-name-a")
        selection.toggle_unit("item-name-a")
        assert not selection.is_selected("item-name-a")

    def test_toggle_unknown_unit(self, units):
        with pytest.raises(KeyError):
            TranslationSelection(units).toggle_unit("nope")

    def test_toggle_kind_selects_when_partially_selected(self, units):
        selection = TranslationSelection(units)
        selection.toggle_unit("item-name-a")

        selection.toggle_kind("item_name")
        assert selection.is_selected("item-name-a")
        assert selection.is_selected("item-name-b")

        selection.toggle_kind("item_name")
        assert not selection.is_selected("item-name-a")
        assert not selection.is_selected("item-name-b")

    def test_toggle_kind_leaves_other_kinds(self, units):
        selection = TranslationSelection(units)
        selection.toggle_kind("ingredient")
        assert not selection.is_selected("ingredient-g")
        assert selection.is_selected("item-desc-a")

    def test_toggle_language(self, units):
        selection = TranslationSelection(units)
        selection.toggle_language("ja")
        assert selection.languages == ["en", "ja"]
        selection.toggle_language("en")
        assert selection.languages == ["ja"]
        with pytest.raises(InvalidCodeError):
            selection.toggle_language("it")

    def test_select_and_deselect_all(self, units):
        selection = TranslationSelection(units, ["en", "fr"])
        selection.select_all()
        assert selection.selected_count == 6
        assert selection.pair_count == 12
        selection.deselect_all()
        assert selection.selected_units == []
        assert selection.pair_count == 0
