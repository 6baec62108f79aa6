"""
Pagination types for live-pager.

This module contains the Pydantic models for the pagination state machine:
the derived pagination mode, the reducer-owned state, the events fed into the
reducer and the read-only result surface handed to consumers.
"""

from enum import Enum
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class PaginationMode(str, Enum):
    """How pagination state is interpreted and which controls are valid."""

    # Entire matching dataset is returned in one go
    NONE = "none"
    # First batch is returned, more can be requested gradually
    INFINITE_SCROLL = "infinite_scroll"
    # Results are split into pages and a total page count is tracked
    TRADITIONAL = "traditional"


class PaginationState(BaseModel):
    """Reducer-owned pagination state. Instances are never mutated in place."""

    result: List[Any] = Field(default_factory=list, description="Materialized items")
    is_fetching: bool = Field(default=True, description="A subscription update is pending")
    is_exhausted: bool = Field(default=False, description="No further items are known to exist")
    limit: int = Field(default=0, ge=0, description="Requested result bound")
    page: Optional[int] = Field(default=None, ge=0, description="Current page")
    page_count: int = Field(default=0, ge=0, description="Total number of pages")

    class Config:
        frozen = True


class Reset(BaseModel):
    """Drop materialized results and shrink the limit back to one batch."""

    type: Literal["reset"] = "reset"
    page_size: int = Field(..., ge=0)

    class Config:
        frozen = True


class FetchMore(BaseModel):
    """Grow the limit by one batch."""

    type: Literal["fetch_more"] = "fetch_more"
    page_size: int = Field(..., ge=0)

    class Config:
        frozen = True


class FetchPage(BaseModel):
    """Jump to a specific page."""

    type: Literal["fetch_page"] = "fetch_page"
    page: int

    class Config:
        frozen = True


class CountPages(BaseModel):
    """Record the total number of pages."""

    type: Literal["count_pages"] = "count_pages"
    page_count: int = Field(..., ge=0)

    class Config:
        frozen = True


class FetchSuccess(BaseModel):
    """A result subscription delivered items."""

    type: Literal["fetch_success"] = "fetch_success"
    items: List[Any] = Field(default_factory=list)

    class Config:
        frozen = True


class QueryChanged(BaseModel):
    """The materialized query changed and a new subscription is being opened."""

    type: Literal["query_changed"] = "query_changed"

    class Config:
        frozen = True


PaginationEvent = Union[Reset, FetchMore, FetchPage, CountPages, FetchSuccess, QueryChanged]


class QueryResult(BaseModel):
    """
    Read-only view of a live query handed to consumers.

    Fields:
        result: Current ordered items (record handles or plain values)
        is_fetching: Fetching is in progress
        is_exhausted: All available results have been fetched (infinite scroll)
        page_count: Total number of pages (traditional pagination)
        current_page: Current page number, None when pagination is disabled
    """

    result: List[Any] = Field(default_factory=list)
    is_fetching: bool
    is_exhausted: bool
    page_count: int
    current_page: Optional[int] = None
