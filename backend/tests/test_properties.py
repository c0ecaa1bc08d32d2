"""
Property-based tests for the pure pieces: selection counts, suggestion
sanitising and URL validation.
"""

import pytest
from hypothesis import given, strategies as st

from rest_api.services.ai.autocomplete_service import sanitize_suggestion
from rest_api.services.translation.collector import TranslatableUnit, group_by_kind
from rest_api.services.translation.selection import TranslationSelection
from shared.config.constants import ALLERGEN_CODES, ContentKind, Languages, Limits
from shared.utils.validators import validate_image_url

kinds = st.sampled_from(ContentKind.ALL)
unit_lists = st.lists(kinds, max_size=30).map(
    lambda ks: [TranslatableUnit(f"u{n}", kind, f"testo {n}", f"e{n}", f"L{n}") for n, kind in enumerate(ks)]
)
language_lists = st.lists(st.sampled_from(Languages.TARGETS), unique=True)


@given(unit_lists, language_lists)
def test_pair_count_is_product(units, languages):
    selection = TranslationSelection(units, languages)
    assert selection.pair_count == selection.selected_count * len(languages)
    assert selection.selected_count == len(selection.selected_units)
    assert selection.selected_count <= selection.total_count == len(units)


@given(unit_lists, kinds)
def test_toggle_kind_is_all_or_nothing(units, kind):
    selection = TranslationSelection(units)
    selection.toggle_kind(kind)
    states = {selection.is_selected(u.id) for u in units if u.kind == kind}
    assert len(states) <= 1


@given(unit_lists, kinds)
def test_toggle_kind_twice_from_full_selection_restores(units, kind):
    selection = TranslationSelection(units)
    selection.select_all()
    selection.toggle_kind(kind)
    selection.toggle_kind(kind)
    assert selection.selected_count == len(units)


@given(unit_lists)
def test_grouping_partitions_units(units):
    groups = group_by_kind(units)
    assert sum(len(g.units) for g in groups) == len(units)
    assert len({g.kind for g in groups}) == len(groups)


@given(
    st.one_of(st.none(), st.integers(), st.floats(allow_nan=True), st.text()),
    st.lists(st.one_of(st.text(), st.integers())),
    st.lists(st.one_of(st.sampled_from(ALLERGEN_CODES), st.text())),
)
def test_suggestion_always_within_bounds(calories, ingredients, allergens):
    suggestion = sanitize_suggestion({
        "description": "Una descrizione valida.",
        "ingredients": ingredients,
        "allergens": allergens,
        "calories": calories,
    })
    assert Limits.MIN_CALORIES <= suggestion.calories <= Limits.MAX_CALORIES
    assert len(suggestion.ingredients) <= Limits.MAX_INGREDIENTS
    assert all(name.strip() for name in suggestion.ingredients)
    assert set(suggestion.allergens) <= set(ALLERGEN_CODES)
    assert len(suggestion.allergens) == len(set(suggestion.allergens))


@given(
    st.sampled_from(["localhost", "127.0.0.1", "10.1.2.3", "192.168.0.7", "169.254.169.254", "172.20.0.1"]),
    st.sampled_from(["http", "https"]),
    st.text(alphabet="abcdefghij/", max_size=20),
)
def test_internal_hosts_never_accepted(host, scheme, path):
    with pytest.raises(ValueError):
        validate_image_url(f"{scheme}://{host}/{path}")
