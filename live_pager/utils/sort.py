"""
Sort utilities for live-pager.

This module parses `field` / `-field` sort strings and orders items the way a
QueryDescription asks for.
"""

from typing import Any, List, Optional, Tuple

from ..models.config import SortOption, SortOrder


def parse_sort_string(sort: Optional[str]) -> Optional[SortOption]:
    """
    Parse a sort string into a SortOption.

    A leading '-' means descending, anything else ascending.

    Args:
        sort: Sort string (e.g., 'name' or '-created_at')

    Returns:
        SortOption, or None for empty/blank input

    Examples:
        >>> parse_sort_string('-created_at')
        SortOption(field='created_at', order='desc')
        >>> parse_sort_string('name')
        SortOption(field='name', order='asc')
    """
    if not isinstance(sort, str):
        return None

    sort = sort.strip()
    if not sort:
        return None

    if sort.startswith("-"):
        field = sort[1:].strip()
        return SortOption(field=field, order="desc") if field else None

    return SortOption(field=sort, order="asc")


def build_sort_string(option: SortOption) -> str:
    """
    Convert a SortOption back into `field` / `-field` form.

    Examples:
        >>> build_sort_string(SortOption(field='name', order='desc'))
        '-name'
    """
    return f"-{option.field}" if option.order == "desc" else option.field


def get_field(item: Any, field: str) -> Any:
    """Read a field from a dict or a record handle."""
    if isinstance(item, dict):
        return item.get(field)
    getter = getattr(item, "get", None)
    if callable(getter):
        return getter(field)
    return getattr(item, field, None)


def _type_group(value: Any) -> Tuple[int, str]:
    # Numbers before strings before everything else (grouped by type name)
    if isinstance(value, (int, float)):
        return (0, "")
    if isinstance(value, str):
        return (1, "")
    return (2, type(value).__name__)


def apply_sort(
    items: List[Any], sort_by: Optional[str], sort_order: Optional[SortOrder]
) -> List[Any]:
    """
    Sort items by a single field.

    Ascending compares values with the ordinary `<` ordering; descending
    inverts it. A field holding values of different types is ordered by type
    first (numbers, then strings, then other types by type name), so values
    of different types are never compared with each other. Items missing the
    field (or holding None) sort last in ascending order. Equal keys keep
    their input order.

    Args:
        items: Items (dicts or record handles exposing `get`)
        sort_by: Field to sort by; None leaves the order unchanged
        sort_order: 'asc' or 'desc' (None = 'asc')

    Returns:
        New sorted list

    Examples:
        >>> [i['v'] for i in apply_sort([{'v': 'b'}, {'v': 2}, {'v': 'a'}], 'v', 'asc')]
        [2, 'a', 'b']
    """
    if not sort_by:
        return list(items)

    def sort_key(item: Any) -> Any:
        value = get_field(item, sort_by)
        if value is None:
            return (True, (0, ""), 0)
        return (False, _type_group(value), value)

    return sorted(items, key=sort_key, reverse=sort_order == "desc")
