"""Tests for item resolution and the search session state machine."""
from __future__ import annotations

import pytest

from shopfinder.services.resolver import (
    ResolutionState,
    SearchSession,
    matching_item_names,
    resolve_item,
)


@pytest.fixture
def three_name_catalogue(shop_factory):
    return [
        shop_factory("Library", [("Enchanted Book", 8), ("Diamond Sword", 20)]),
        shop_factory("Circuits", [("Repeater", 5), ("Piston", 2)]),
        shop_factory("Fortress", [("Nether Wart", 7), ("repeater ", 3)]),
    ]


class TestMatchingItemNames:
    """Tests for matching_item_names."""

    def test_deduplicates_across_shops(self, seed_catalogue):
        assert matching_item_names(seed_catalogue, "Rep") == ["Repeater"]

    def test_catalogue_order_first_spelling(self, three_name_catalogue):
        assert matching_item_names(three_name_catalogue, "e") == [
            "Enchanted Book",
            "Repeater",
            "Nether Wart",
        ]

    def test_first_seen_casing_kept(self, shop_factory):
        catalogue = [
            shop_factory("A", [("REDSTONE", 1)]),
            shop_factory("B", [("Redstone", 1)]),
        ]
        assert matching_item_names(catalogue, "red") == ["REDSTONE"]

    def test_seed_catalogue_letter_e(self, seed_catalogue):
        assert matching_item_names(seed_catalogue, "e") == [
            "Enchanted Book",
            "Repeater",
            "Redstone",
            "Blaze Rod",
            "Nether Wart",
        ]

    def test_blank_search_matches_nothing(self, seed_catalogue):
        assert matching_item_names(seed_catalogue, "  ") == []


class TestResolveItem:
    """Tests for resolve_item."""

    def test_empty_search_is_idle(self, seed_catalogue):
        resolution = resolve_item(seed_catalogue, "")
        assert resolution.state is ResolutionState.IDLE
        assert resolution.active_item is None
        assert resolution.matching_names == ()

    def test_empty_search_ignores_stale_selection(self, seed_catalogue):
        resolution = resolve_item(seed_catalogue, "   ", selected="Repeater")
        assert resolution.state is ResolutionState.IDLE
        assert resolution.active_item is None

    def test_single_match_auto_resolves(self, seed_catalogue):
        resolution = resolve_item(seed_catalogue, "Rep")
        assert resolution.state is ResolutionState.AUTO_RESOLVED
        assert resolution.active_item == "Repeater"
        assert not resolution.needs_disambiguation

    def test_multiple_matches_are_ambiguous(self, three_name_catalogue):
        resolution = resolve_item(three_name_catalogue, "e")
        assert resolution.state is ResolutionState.AMBIGUOUS
        assert resolution.active_item is None
        assert resolution.needs_disambiguation
        assert len(resolution.matching_names) == 3

    def test_selection_resolves_ambiguity(self, three_name_catalogue):
        resolution = resolve_item(three_name_catalogue, "e", selected="Nether Wart")
        assert resolution.state is ResolutionState.SELECTED
        assert resolution.active_item == "Nether Wart"
        assert not resolution.needs_disambiguation

    def test_selection_wins_even_when_not_matching(self, seed_catalogue):
        resolution = resolve_item(seed_catalogue, "Rep", selected="Piston")
        assert resolution.active_item == "Piston"

    def test_no_match(self, seed_catalogue):
        resolution = resolve_item(seed_catalogue, "Elytra")
        assert resolution.state is ResolutionState.NO_MATCH
        assert resolution.active_item is None
        assert not resolution.needs_disambiguation

    def test_search_is_trimmed(self, seed_catalogue):
        assert resolve_item(seed_catalogue, "  blaze ").search == "blaze"


class TestSearchSession:
    """Tests for the caller-owned search state."""

    def test_idle_to_ambiguous_to_selected(self, three_name_catalogue):
        session = SearchSession()
        assert session.resolve(three_name_catalogue).state is ResolutionState.IDLE

        session.set_search("e")
        assert session.resolve(three_name_catalogue).state is ResolutionState.AMBIGUOUS

        assert session.select("Nether Wart")
        resolution = session.resolve(three_name_catalogue)
        assert resolution.state is ResolutionState.SELECTED
        assert resolution.active_item == "Nether Wart"

    def test_changing_search_discards_selection(self, three_name_catalogue):
        session = SearchSession()
        session.set_search("e")
        session.select("Nether Wart")

        session.set_search("ep")
        assert session.selected is None
        resolution = session.resolve(three_name_catalogue)
        assert resolution.state is ResolutionState.AUTO_RESOLVED
        assert resolution.active_item == "Repeater"

    def test_same_search_keeps_selection(self):
        session = SearchSession()
        session.set_search("e")
        session.select("Repeater")
        session.set_search("e")
        assert session.selected == "Repeater"

    def test_cannot_select_without_search(self):
        session = SearchSession()
        assert not session.select("Repeater")
        assert session.selected is None

    def test_clear_selection_returns_to_ambiguous(self, three_name_catalogue):
        session = SearchSession(search="e")
        session.select("Repeater")
        session.clear_selection()
        assert session.resolve(three_name_catalogue).needs_disambiguation
