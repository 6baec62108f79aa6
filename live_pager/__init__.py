"""
live-pager - reactive, paginated views over live queries.

This package keeps a paginated result set in sync with a continuously
updating query against a reactive data source, and lets the consumer decide
how much of it is materialized: everything at once, incrementally
("load more"), or one page at a time.
"""

from .client import LiveQuery
from .errors import CollectionError, ConfigurationError, LivePagerError
from .models.config import QueryOptions, SortOption
from .models.filter import FilterOption
from .models.pagination import (
    CountPages,
    FetchMore,
    FetchPage,
    FetchSuccess,
    PaginationEvent,
    PaginationMode,
    PaginationState,
    QueryChanged,
    QueryResult,
    Reset,
)
from .models.query import QueryDescription
from .models.source import QuerySource, Subscription, is_query_source
from .services.memory import (
    CollectionQuery,
    CollectionSubscription,
    Document,
    InMemoryCollection,
    InMemoryDatabase,
)
from .services.subscription import SubscriptionManager
from .utils.config_loader import load_options
from .utils.pagination import reduce, select_mode
from .utils.query_materializer import materialize_query

__version__ = "0.1.0"
__author__ = "live-pager contributors"
__license__ = "MIT"

__all__ = [
    "LiveQuery",
    "LivePagerError",
    "ConfigurationError",
    "CollectionError",
    "QueryOptions",
    "SortOption",
    "FilterOption",
    "PaginationMode",
    "PaginationState",
    "PaginationEvent",
    "Reset",
    "FetchMore",
    "FetchPage",
    "CountPages",
    "FetchSuccess",
    "QueryChanged",
    "QueryResult",
    "QueryDescription",
    "QuerySource",
    "Subscription",
    "is_query_source",
    "Document",
    "CollectionQuery",
    "CollectionSubscription",
    "InMemoryCollection",
    "InMemoryDatabase",
    "SubscriptionManager",
    "load_options",
    "reduce",
    "select_mode",
    "materialize_query",
]
