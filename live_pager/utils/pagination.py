"""Pagination utilities for live-pager.

This module holds the pure parts of the pagination state machine: mode
selection, initial state construction, the reducer and the helpers used to
turn raw data-source emissions into reducer input.
"""

import math
from typing import Any, Callable, List, Optional

from ..models.config import QueryOptions
from ..models.pagination import (
    CountPages,
    FetchMore,
    FetchPage,
    FetchSuccess,
    PaginationEvent,
    PaginationMode,
    PaginationState,
    QueryChanged,
    Reset,
)


def select_mode(page_size: int, starting_page: Optional[int] = None) -> PaginationMode:
    """Derive the pagination mode from configuration.

    Args:
        page_size: Configured page size (0 = no pagination)
        starting_page: Optional 1-based starting page

    Returns:
        PaginationMode

    Examples:
        >>> select_mode(0, 3)
        <PaginationMode.NONE: 'none'>
        >>> select_mode(10)
        <PaginationMode.INFINITE_SCROLL: 'infinite_scroll'>
        >>> select_mode(10, 1)
        <PaginationMode.TRADITIONAL: 'traditional'>

    """
    if not page_size:
        return PaginationMode.NONE
    if starting_page is None:
        return PaginationMode.INFINITE_SCROLL
    return PaginationMode.TRADITIONAL


def create_initial_state(options: QueryOptions, mode: PaginationMode) -> PaginationState:
    """Build the state a live query starts from.

    Infinite scroll starts on page 1 with one batch requested, traditional
    pagination starts on the configured page, and unpaginated queries carry
    neither a page nor a limit.

    Args:
        options: Query options
        mode: Pagination mode derived from options

    Returns:
        Initial PaginationState (fetching, empty result)

    """
    if mode == PaginationMode.INFINITE_SCROLL:
        page: Optional[int] = 1
        limit = options.page_size
    else:
        page = options.starting_page if mode == PaginationMode.TRADITIONAL else None
        limit = 0

    return PaginationState(
        result=[],
        is_fetching=True,
        is_exhausted=False,
        limit=limit,
        page=page,
        page_count=0,
    )


def reduce(state: PaginationState, event: PaginationEvent) -> PaginationState:
    """Compute the next pagination state for an event.

    Pure and total: events that do not apply to the current mode are filtered
    out before they get here, and unknown events leave the state untouched.

    Args:
        state: Current state
        event: Event to apply

    Returns:
        New PaginationState (the input is never modified)

    """
    if isinstance(event, Reset):
        return state.model_copy(
            update={"result": [], "is_fetching": True, "limit": event.page_size}
        )

    if isinstance(event, FetchMore):
        page = state.page + 1 if state.page is not None else None
        return state.model_copy(
            update={"is_fetching": True, "page": page, "limit": state.limit + event.page_size}
        )

    if isinstance(event, FetchPage):
        return state.model_copy(update={"is_fetching": True, "page": event.page})

    if isinstance(event, CountPages):
        return state.model_copy(update={"page_count": event.page_count})

    if isinstance(event, FetchSuccess):
        items = list(event.items)
        # A short batch proves nothing more exists upstream right now
        is_exhausted = not state.limit or len(items) < state.limit
        return state.model_copy(
            update={"result": items, "is_fetching": False, "is_exhausted": is_exhausted}
        )

    if isinstance(event, QueryChanged):
        return state.model_copy(update={"is_fetching": True})

    return state


def compute_page_count(total_items: int, page_size: int) -> int:
    """Number of pages needed to show total_items.

    Examples:
        >>> compute_page_count(12, 5)
        3
        >>> compute_page_count(0, 5)
        0

    """
    if page_size <= 0:
        return 0
    return math.ceil(total_items / page_size)


def normalize_emission(payload: Any) -> List[Any]:
    """Turn a data-source emission into a list of items.

    A single emitted item becomes a one-element list; None (an empty
    single-item query) becomes an empty list.
    """
    if payload is None:
        return []
    if isinstance(payload, (list, tuple)):
        return list(payload)
    return [payload]


def to_plain_value(item: Any) -> Any:
    """Project a record handle to its plain value via `to_json()` when it has one."""
    to_json: Optional[Callable[[], Any]] = getattr(item, "to_json", None)
    if callable(to_json):
        return to_json()
    return item
