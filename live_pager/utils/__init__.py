"""Utility modules for live-pager."""

from .config_loader import build_options, load_options
from .filter import apply_filters
from .pagination import reduce, select_mode
from .query_materializer import materialize_query
from .sort import apply_sort, parse_sort_string

__all__ = [
    "build_options",
    "load_options",
    "apply_filters",
    "reduce",
    "select_mode",
    "materialize_query",
    "apply_sort",
    "parse_sort_string",
]
