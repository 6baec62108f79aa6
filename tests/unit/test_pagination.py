"""
Unit tests for pagination utilities.

This module contains tests for the pure parts of the pagination state
machine: select_mode, create_initial_state, reduce, compute_page_count,
normalize_emission and to_plain_value.
"""

import pytest

from live_pager.models.config import QueryOptions
from live_pager.models.pagination import (
    CountPages,
    FetchMore,
    FetchPage,
    FetchSuccess,
    PaginationMode,
    PaginationState,
    QueryChanged,
    Reset,
)
from live_pager.utils.pagination import (
    compute_page_count,
    create_initial_state,
    normalize_emission,
    reduce,
    select_mode,
    to_plain_value,
)

SAMPLE_STATES = [
    PaginationState(),
    PaginationState(result=["a", "b"], is_fetching=False, limit=2, page=1),
    PaginationState(result=["a"], is_fetching=False, is_exhausted=True, limit=6, page=3),
    PaginationState(result=[1, 2, 3], is_fetching=True, limit=0, page=None, page_count=4),
]


class TestSelectMode:
    """Test cases for select_mode function."""

    @pytest.mark.parametrize("starting_page", [None, 1, 5])
    def test_zero_page_size_is_none(self, starting_page):
        """Test that page_size 0 disables pagination regardless of starting page."""
        assert select_mode(0, starting_page) == PaginationMode.NONE

    def test_page_size_without_starting_page_is_infinite_scroll(self):
        """Test page_size without starting page selects infinite scroll."""
        assert select_mode(10) == PaginationMode.INFINITE_SCROLL
        assert select_mode(10, None) == PaginationMode.INFINITE_SCROLL

    def test_page_size_with_starting_page_is_traditional(self):
        """Test page_size with starting page selects traditional pagination."""
        assert select_mode(10, 1) == PaginationMode.TRADITIONAL


class TestCreateInitialState:
    """Test cases for create_initial_state function."""

    def test_infinite_scroll_starts_with_one_batch(self):
        """Test infinite scroll starts on page 1 with limit = page_size."""
        options = QueryOptions(page_size=4)
        state = create_initial_state(options, PaginationMode.INFINITE_SCROLL)

        assert state.page == 1
        assert state.limit == 4
        assert state.is_fetching is True
        assert state.is_exhausted is False
        assert state.result == []

    def test_traditional_starts_on_starting_page(self):
        """Test traditional pagination starts on the configured page without a limit."""
        options = QueryOptions(page_size=5, starting_page=2)
        state = create_initial_state(options, PaginationMode.TRADITIONAL)

        assert state.page == 2
        assert state.limit == 0
        assert state.page_count == 0

    def test_none_mode_has_no_page_or_limit(self):
        """Test unpaginated state carries neither page nor limit."""
        state = create_initial_state(QueryOptions(), PaginationMode.NONE)

        assert state.page is None
        assert state.limit == 0
        assert state.is_fetching is True


class TestReduce:
    """Test cases for the reducer."""

    @pytest.mark.parametrize("state", SAMPLE_STATES)
    def test_reset(self, state):
        """Test Reset empties result, sets limit and marks fetching for any state."""
        new_state = reduce(state, Reset(page_size=2))

        assert new_state.result == []
        assert new_state.limit == 2
        assert new_state.is_fetching is True
        assert new_state.page == state.page
        assert new_state.is_exhausted == state.is_exhausted

    def test_fetch_more_grows_limit_and_page(self):
        """Test FetchMore adds one batch and advances the page."""
        state = PaginationState(result=["a", "b"], is_fetching=False, limit=2, page=1)
        new_state = reduce(state, FetchMore(page_size=2))

        assert new_state.limit == 4
        assert new_state.page == 2
        assert new_state.is_fetching is True
        assert new_state.result == ["a", "b"]

    def test_fetch_more_without_page_keeps_page_undefined(self):
        """Test FetchMore on a state without a page does not invent one."""
        new_state = reduce(PaginationState(limit=0), FetchMore(page_size=3))

        assert new_state.page is None
        assert new_state.limit == 3

    def test_fetch_page(self):
        """Test FetchPage jumps to the page and marks fetching."""
        state = PaginationState(is_fetching=False, page=1, page_count=3)
        new_state = reduce(state, FetchPage(page=3))

        assert new_state.page == 3
        assert new_state.is_fetching is True
        assert new_state.page_count == 3

    def test_count_pages_leaves_fetching_and_result(self):
        """Test CountPages only updates page_count."""
        state = PaginationState(result=["x"], is_fetching=True, page=1)
        new_state = reduce(state, CountPages(page_count=7))

        assert new_state.page_count == 7
        assert new_state.is_fetching is True
        assert new_state.result == ["x"]

    @pytest.mark.parametrize("state", SAMPLE_STATES)
    @pytest.mark.parametrize("items", [[], ["a"], ["a", "b"], ["a", "b", "c"]])
    def test_fetch_success_exhaustion_rule(self, state, items):
        """Test is_exhausted == (limit == 0 or len(items) < limit)."""
        new_state = reduce(state, FetchSuccess(items=items))

        assert new_state.is_exhausted == (state.limit == 0 or len(items) < state.limit)
        assert new_state.is_fetching is False
        assert new_state.result == items

    def test_fetch_success_replaces_result_wholesale(self):
        """Test the result list is replaced, never mutated in place."""
        previous = ["old"]
        state = PaginationState(result=previous, limit=2)
        new_state = reduce(state, FetchSuccess(items=["a", "b"]))

        assert new_state.result == ["a", "b"]
        assert previous == ["old"]
        assert new_state.result is not previous

    def test_query_changed_marks_fetching(self):
        """Test QueryChanged only flips is_fetching."""
        state = PaginationState(result=["a"], is_fetching=False, limit=2, page=1)
        new_state = reduce(state, QueryChanged())

        assert new_state.is_fetching is True
        assert new_state.result == ["a"]
        assert new_state.limit == 2

    def test_reduce_does_not_modify_input(self):
        """Test the reducer is pure."""
        state = PaginationState(result=["a"], is_fetching=False, limit=2, page=1)
        reduce(state, FetchMore(page_size=2))

        assert state.limit == 2
        assert state.page == 1
        assert state.is_fetching is False

    def test_unknown_event_returns_same_state(self):
        """Test unknown events are ignored."""
        state = PaginationState(limit=2)

        assert reduce(state, object()) is state


class TestComputePageCount:
    """Test cases for compute_page_count function."""

    @pytest.mark.parametrize(
        "total, page_size, expected",
        [(12, 5, 3), (10, 5, 2), (0, 5, 0), (1, 5, 1), (7, 0, 0)],
    )
    def test_page_count(self, total, page_size, expected):
        """Test page count is ceil(total / page_size)."""
        assert compute_page_count(total, page_size) == expected


class TestNormalizeEmission:
    """Test cases for normalize_emission function."""

    def test_list_is_copied(self):
        """Test list payloads are returned as a new list."""
        payload = ["a", "b"]
        items = normalize_emission(payload)

        assert items == ["a", "b"]
        assert items is not payload

    def test_single_item_is_wrapped(self):
        """Test a single emitted item becomes a one-element list."""
        assert normalize_emission({"id": "1"}) == [{"id": "1"}]

    def test_none_is_empty(self):
        """Test an empty single-item result becomes an empty list."""
        assert normalize_emission(None) == []


class TestToPlainValue:
    """Test cases for to_plain_value function."""

    def test_uses_to_json(self):
        """Test record handles are projected through to_json()."""

        class Record:
            def to_json(self):
                return {"id": "1"}

        assert to_plain_value(Record()) == {"id": "1"}

    def test_plain_value_passes_through(self):
        """Test values without to_json() are returned unchanged."""
        value = {"id": "1"}

        assert to_plain_value(value) is value
