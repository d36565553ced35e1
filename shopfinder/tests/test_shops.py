"""Tests for the shop list aggregation."""
from __future__ import annotations

from shopfinder.services.filters import SearchFilters
from shopfinder.services.shops import aggregate_shops

AT_ORIGIN = SearchFilters(user_x=0.0, user_z=0.0)


def _names(entries):
    return [entry.shop.name for entry in entries]


class TestAggregateShops:
    """Tests for aggregate_shops."""

    def test_blank_search_lists_every_shop_in_catalogue_order(self, seed_catalogue):
        entries = aggregate_shops(seed_catalogue, SearchFilters())
        assert _names(entries) == ["Monument Bank", "Artificial Industries", "VEC Incorporated"]
        assert all(entry.distance is None for entry in entries)

    def test_blank_search_sorted_by_distance_with_location(self, seed_catalogue):
        entries = aggregate_shops(seed_catalogue, AT_ORIGIN)
        assert [(entry.shop.name, entry.distance) for entry in entries] == [
            ("Artificial Industries", 361),
            ("Monument Bank", 483),
            ("VEC Incorporated", 3650),
        ]

    def test_substring_search_without_active_item(self, seed_catalogue):
        entries = aggregate_shops(seed_catalogue, SearchFilters(), search="ston")
        assert _names(entries) == ["Artificial Industries"]

    def test_substring_matches_any_item(self, seed_catalogue):
        entries = aggregate_shops(seed_catalogue, SearchFilters(), search="e")
        assert _names(entries) == ["Monument Bank", "Artificial Industries", "VEC Incorporated"]

    def test_active_item_needs_exact_name(self, shop_factory):
        catalogue = [
            shop_factory("Exact", [("Repeater", 2)]),
            shop_factory("Plural", [("Repeaters", 2)]),
            shop_factory("Shouty", [("  REPEATER", 2)]),
        ]
        entries = aggregate_shops(catalogue, SearchFilters(), search="rep", active_item="Repeater")
        assert _names(entries) == ["Exact", "Shouty"]

    def test_active_item_overrides_search_text(self, seed_catalogue):
        entries = aggregate_shops(seed_catalogue, SearchFilters(), search="e", active_item="Nether Wart")
        assert _names(entries) == ["VEC Incorporated"]

    def test_rating_filter(self, seed_catalogue):
        entries = aggregate_shops(seed_catalogue, SearchFilters(min_rating=4.2))
        assert _names(entries) == ["Monument Bank"]

    def test_distance_filter(self, seed_catalogue):
        filters = SearchFilters(user_x=0.0, user_z=0.0, max_distance=500)
        entries = aggregate_shops(seed_catalogue, filters)
        assert _names(entries) == ["Artificial Industries", "Monument Bank"]

    def test_unknown_distance_kept_and_sorted_last(self, shop_factory):
        catalogue = [
            shop_factory("Unmapped", [("Piston", 1)], coords=None),
            shop_factory("Far", [("Piston", 1)], coords=(0, 64, 90)),
            shop_factory("Near", [("Piston", 1)], coords=(0, 64, 10)),
            shop_factory("Also Unmapped", [("Piston", 1)], coords=None),
        ]
        filters = SearchFilters(user_x=0.0, user_z=0.0, max_distance=50)
        entries = aggregate_shops(catalogue, filters, search="piston")
        assert _names(entries) == ["Near", "Unmapped", "Also Unmapped"]

    def test_equal_distances_keep_catalogue_order(self, shop_factory):
        catalogue = [
            shop_factory("North", [], coords=(0, 64, -10)),
            shop_factory("South", [], coords=(0, 64, 10)),
        ]
        assert _names(aggregate_shops(catalogue, AT_ORIGIN)) == ["North", "South"]

    def test_no_match_is_empty(self, seed_catalogue):
        assert aggregate_shops(seed_catalogue, SearchFilters(), search="Elytra") == []

    def test_half_location_keeps_catalogue_order(self, seed_catalogue):
        entries = aggregate_shops(seed_catalogue, SearchFilters(user_x=0.0))
        assert _names(entries)[0] == "Monument Bank"
        assert all(entry.distance is None for entry in entries)
