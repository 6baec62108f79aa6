"""Pydantic models for live-pager options, state and data-source contracts."""

from .config import QueryOptions, SortOption, SortOrder
from .filter import FilterOperator, FilterOption
from .pagination import PaginationEvent, PaginationMode, PaginationState, QueryResult
from .query import QueryDescription
from .source import QuerySource, Subscription, is_query_source

__all__ = [
    "QueryOptions",
    "SortOption",
    "SortOrder",
    "FilterOperator",
    "FilterOption",
    "PaginationEvent",
    "PaginationMode",
    "PaginationState",
    "QueryResult",
    "QueryDescription",
    "QuerySource",
    "Subscription",
    "is_query_source",
]
