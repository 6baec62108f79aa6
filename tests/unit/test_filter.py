"""
Unit tests for filter utilities.

This module contains tests for matches_filter and apply_filters across all
supported operators.
"""

import pytest
from pydantic import ValidationError

from live_pager.models.filter import FilterOption
from live_pager.utils.filter import apply_filters, matches_filter

ITEM = {
    "name": "Luke Skywalker",
    "age": 19,
    "tags": ["jedi", "pilot"],
    "ship": None,
    "active": True,
}


class TestFilterOption:
    """Test cases for FilterOption model."""

    def test_unknown_operator_rejected(self):
        """Test operators outside the supported set fail validation."""
        with pytest.raises(ValidationError):
            FilterOption(field="name", op="startsWith", value="L")

    def test_value_defaults_to_none(self):
        """Test value is optional for null checks."""
        assert FilterOption(field="ship", op="isNull").value is None


class TestMatchesFilter:
    """Test cases for matches_filter function."""

    @pytest.mark.parametrize(
        "op, field, value, expected",
        [
            ("eq", "age", 19, True),
            ("eq", "age", 20, False),
            ("eq", "missing", None, False),
            ("neq", "age", 20, True),
            ("neq", "missing", 1, True),
            ("in", "age", [18, 19], True),
            ("in", "age", [1, 2], False),
            ("in", "age", 19, True),
            ("nin", "age", [1, 2], True),
            ("nin", "age", [19], False),
            ("nin", "missing", [19], True),
            ("gt", "age", 18, True),
            ("gt", "age", 19, False),
            ("gte", "age", 19, True),
            ("lt", "age", 20, True),
            ("lte", "age", 18, False),
            ("gt", "name", 1, False),
            ("gt", "missing", 1, False),
            ("contains", "tags", "jedi", True),
            ("contains", "tags", "sith", False),
            ("contains", "name", "Sky", True),
            ("contains", "name", "sky", False),
            ("like", "name", "sky", True),
            ("like", "name", "vader", False),
            ("isNull", "ship", None, True),
            ("isNull", "missing", None, True),
            ("isNull", "age", None, False),
            ("isNotNull", "age", None, True),
            ("isNotNull", "ship", None, False),
            ("isNotNull", "missing", None, False),
        ],
    )
    def test_operators(self, op, field, value, expected):
        """Test each operator against a sample document."""
        assert matches_filter(ITEM, FilterOption(field=field, op=op, value=value)) is expected

    def test_booleans_are_not_ordered(self):
        """Test comparison operators reject boolean values."""
        assert matches_filter(ITEM, FilterOption(field="active", op="gte", value=0)) is False
        assert matches_filter({"n": 1}, FilterOption(field="n", op="lte", value=True)) is False


class TestApplyFilters:
    """Test cases for apply_filters function."""

    def test_no_filters_keeps_everything(self):
        """Test None or empty filters return a copy of the input."""
        items = [{"a": 1}, {"a": 2}]

        assert apply_filters(items, None) == items
        assert apply_filters(items, []) is not items

    def test_filters_are_combined_with_and(self):
        """Test every filter must match."""
        items = [
            {"status": "active", "age": 30},
            {"status": "active", "age": 10},
            {"status": "inactive", "age": 30},
        ]
        filters = [
            FilterOption(field="status", op="eq", value="active"),
            FilterOption(field="age", op="gt", value=18),
        ]

        assert apply_filters(items, filters) == [{"status": "active", "age": 30}]
