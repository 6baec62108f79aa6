"""
Query materialization.

Derives the concrete skip/limit/sort description a data source is subscribed
with from the current pagination state, the query options and the mode.
"""

from typing import Optional

from ..models.config import QueryOptions
from ..models.pagination import PaginationMode, PaginationState
from ..models.query import QueryDescription


def materialize_query(
    state: PaginationState, options: QueryOptions, mode: PaginationMode
) -> QueryDescription:
    """
    Build the bounded/sorted query for the current state.

    - NONE: unbounded, sorted if configured
    - INFINITE_SCROLL: limit grows with every batch, always read from the start
    - TRADITIONAL: one page window (skip + page_size)

    Args:
        state: Current pagination state
        options: Query options
        mode: Pagination mode

    Returns:
        QueryDescription

    Examples:
        >>> state = PaginationState(page=3, limit=0)
        >>> options = QueryOptions(page_size=5, starting_page=1)
        >>> materialize_query(state, options, PaginationMode.TRADITIONAL)
        QueryDescription(skip=10, limit=5, sort_by=None, sort_order=None)
    """
    skip: Optional[int] = None
    limit: Optional[int] = None

    if mode == PaginationMode.TRADITIONAL:
        page = state.page if state.page is not None else 1
        # Page 0 passes the facade guard; it reads the first window
        skip = max(0, (page - 1) * options.page_size)
        limit = options.page_size
    elif mode == PaginationMode.INFINITE_SCROLL:
        limit = state.limit

    sort_by = options.sort_by or None
    return QueryDescription(
        skip=skip,
        limit=limit,
        sort_by=sort_by,
        sort_order=options.sort_order if sort_by else None,
    )


def count_query() -> QueryDescription:
    """Unbounded description used to observe the total number of matching items."""
    return QueryDescription()
