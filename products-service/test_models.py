"""
Unit tests for product helpers (id parsing, id generation, stock filter).
"""
import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from models import Product, find_product_index, is_in_stock, json_safe, next_product_id, parse_product_id


class TestParseProductId:
    """Tests for parsing the ID path segment."""

    @pytest.mark.parametrize("raw, expected", [
        ("1", 1),
        ("42", 42),
        ("12abc", 12),
        (" 7", 7),
        ("-3", -3),
        ("abc", None),
        ("", None),
        ("1.9", 1),
        ("١", None),
        ("１２", None),
    ])
    def test_parse(self, raw, expected):
        """Test leading-integer parsing with ASCII digits only."""
        assert parse_product_id(raw) == expected


class TestNextProductId:
    """Tests for new product ID generation."""

    def test_empty_collection(self):
        """Test that an empty collection starts at 1."""
        assert next_product_id([]) == 1

    def test_uses_max_not_last(self):
        """Test that the highest ID is used, not the last one."""
        assert next_product_id([{"id": 5}, {"id": 2}]) == 6

    def test_ignores_non_integer_ids(self):
        """Test that string, boolean and missing IDs are ignored."""
        assert next_product_id([{"id": "9"}, {"id": True}, {"name": "x"}, {"id": 3}]) == 4


class TestFindProductIndex:
    """Tests for product lookup by ID."""

    def test_finds_first_match(self):
        """Test that the matching product index is returned."""
        assert find_product_index([{"id": 1}, {"id": 2}], 2) == 1

    def test_none_never_matches(self):
        """Test that an unparsable ID matches nothing."""
        assert find_product_index([{"id": 1}], None) == -1

    def test_missing_id(self):
        """Test that an unknown ID returns -1."""
        assert find_product_index([{"id": 1}], 9999) == -1


class TestProductRecord:
    """Tests for the stored product record."""

    def test_to_record_uses_wire_names(self):
        """Test that records use the inStock field name."""
        record = Product(id=1, name="Pen", price=1.5, in_stock=True).to_record()
        assert record == {"id": 1, "name": "Pen", "price": 1.5, "inStock": True}

    def test_to_record_replaces_infinite_price(self):
        """Test that an infinite price becomes None in the record."""
        record = Product(id=1, name="Pen", price=float("inf"), in_stock=True).to_record()
        assert record["price"] is None

    def test_is_in_stock_strict(self):
        """Test that only boolean true counts as in stock."""
        assert is_in_stock({"inStock": True})
        assert not is_in_stock({"inStock": "true"})
        assert not is_in_stock({"inStock": 1})
        assert not is_in_stock({})


class TestJsonSafe:
    """Tests for non-finite number replacement."""

    def test_nested_values(self):
        """Test that non-finite floats are replaced at any depth."""
        value = [{"price": float("nan"), "tags": [float("-inf"), 2.5]}, "x", 0]
        assert json_safe(value) == [{"price": None, "tags": [None, 2.5]}, "x", 0]
