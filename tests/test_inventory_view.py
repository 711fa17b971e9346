#!/usr/bin/env python3
"""
Unit tests for the viewer state machine, search filter and card fallbacks.
"""

import os
import sys
import unittest

# Add the parent directory to the path to access utils
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from utils.inventory_api import FetchResult
from utils.inventory_view import ViewerState, card_fields, filter_inventory, load, retry

ITEMS = [
    {"Item Name": "Blue Hoodie", "color": "Blue", "size": "M", "length": "Regular", "Total Stock": "12"},
    {"Item Name": "Red Scarf", "color": "Red", "size": "OS", "length": "Long", "Total Stock": "3"},
    {"Item Name": "Cargo Pants", "color": "Khaki", "size": "32", "length": "30", "Total Stock": "0"},
]


class TestFilterInventory(unittest.TestCase):

    def test_empty_term_keeps_everything(self):
        self.assertEqual(filter_inventory(ITEMS, ""), ITEMS)

    def test_matches_name_case_insensitive(self):
        self.assertEqual(filter_inventory(ITEMS, "hoodie"), [ITEMS[0]])

    def test_matches_color_size_and_length(self):
        self.assertEqual(filter_inventory(ITEMS, "KHAKI"), [ITEMS[2]])
        self.assertEqual(filter_inventory(ITEMS, "os"), [ITEMS[1]])
        self.assertEqual(filter_inventory(ITEMS, "long"), [ITEMS[1]])

    def test_total_stock_is_not_searched(self):
        self.assertEqual(filter_inventory(ITEMS, "12"), [])

    def test_term_is_not_a_regex(self):
        items = [{"Item Name": "Tee (L)", "color": "", "size": "", "length": ""}]
        self.assertEqual(filter_inventory(items, "(L"), items)
        self.assertEqual(filter_inventory(items, ".*"), [])

    def test_missing_columns(self):
        items = [{"Item Name": "Belt", "Total Stock": "2"}, {"color": "Brown"}]
        self.assertEqual(filter_inventory(items, "brown"), [items[1]])
        self.assertEqual(filter_inventory(items, "belt"), [items[0]])

    def test_does_not_mutate_input(self):
        items = list(ITEMS)
        filter_inventory(items, "red")
        self.assertEqual(items, ITEMS)

    def test_empty_list(self):
        self.assertEqual(filter_inventory([], "anything"), [])


class TestViewerState(unittest.TestCase):

    def test_initial_state(self):
        state = ViewerState()
        self.assertEqual(state.inventory, [])
        self.assertTrue(state.loading)
        self.assertIsNone(state.error)
        self.assertEqual(state.search_term, "")
        self.assertFalse(state.refreshing)
        self.assertEqual(state.status, "loading")

    def test_load_success(self):
        state = load(ViewerState(), fetch=lambda: FetchResult.success(ITEMS, ["Item Name"]))
        self.assertEqual(state.status, "ready")
        self.assertEqual(state.inventory, ITEMS)
        self.assertFalse(state.loading)

    def test_failed_refresh_keeps_previous_inventory(self):
        state = load(ViewerState(), fetch=lambda: FetchResult.success(ITEMS, []))
        seen = {}

        def failing_fetch():
            seen["refreshing"] = state.refreshing
            return FetchResult.failure("Failed to fetch inventory data")

        load(state, show_refreshing=True, fetch=failing_fetch)

        self.assertTrue(seen["refreshing"])
        self.assertEqual(state.status, "error")
        self.assertEqual(state.error, "Failed to fetch inventory data")
        self.assertEqual(state.inventory, ITEMS)
        self.assertFalse(state.refreshing)

    def test_success_clears_error_and_replaces_list(self):
        state = ViewerState(inventory=ITEMS, loading=False, error="old error")
        load(state, fetch=lambda: FetchResult.success(ITEMS[:1], []))
        self.assertIsNone(state.error)
        self.assertEqual(state.inventory, ITEMS[:1])

    def test_exception_clears_flags(self):
        def broken_fetch():
            raise RuntimeError("socket closed")

        state = load(ViewerState(), show_refreshing=True, fetch=broken_fetch)
        self.assertEqual(state.error, "socket closed")
        self.assertFalse(state.loading)
        self.assertFalse(state.refreshing)

    def test_exception_without_message_uses_fallback(self):
        def broken_fetch():
            raise RuntimeError()

        state = load(ViewerState(), fetch=broken_fetch)
        self.assertEqual(state.error, "Failed to load inventory")

    def test_retry_shows_loading_then_ready(self):
        state = ViewerState(loading=False, error="Failed")
        seen = {}

        def fetch():
            seen["loading"] = state.loading
            seen["refreshing"] = state.refreshing
            return FetchResult.success(ITEMS, [])

        retry(state, fetch=fetch)

        self.assertEqual(seen, {"loading": True, "refreshing": False})
        self.assertEqual(state.status, "ready")

    def test_loading_takes_priority_over_error(self):
        self.assertEqual(ViewerState(loading=True, error="x").status, "loading")


class TestCardFields(unittest.TestCase):

    def test_values(self):
        fields = card_fields(ITEMS[0])
        self.assertEqual(fields, {
            "name": "Blue Hoodie", "color": "Blue", "size": "M", "length": "Regular", "stock": "12",
        })

    def test_placeholders(self):
        fields = card_fields({"Item Name": "  ", "color": "", "Total Stock": ""})
        self.assertEqual(fields, {
            "name": "Unnamed Item", "color": "-", "size": "-", "length": "-", "stock": "0",
        })


if __name__ == '__main__':
    unittest.main()
