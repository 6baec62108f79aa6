"""
Filter utilities for live-pager.

This module evaluates FilterOption conditions against plain document data.
It backs the selector of in-memory collection queries.
"""

from typing import Any, Dict, List, Optional

from ..models.filter import FilterOption

_NUMBER = (int, float)


def _compare(item_value: Any, op: str, value: Any) -> bool:
    # bool is an int subclass; never order booleans against numbers
    if isinstance(item_value, bool) or isinstance(value, bool):
        return False
    if not isinstance(item_value, _NUMBER) or not isinstance(value, _NUMBER):
        return False
    if op == "gt":
        return item_value > value
    if op == "lt":
        return item_value < value
    if op == "gte":
        return item_value >= value
    return item_value <= value


def matches_filter(item: Dict[str, Any], filter_option: FilterOption) -> bool:
    """
    Check a single document against a single filter.

    Args:
        item: Document data
        filter_option: Filter condition

    Returns:
        True if the document satisfies the condition
    """
    field = filter_option.field
    op = filter_option.op
    value = filter_option.value
    present = field in item
    item_value = item.get(field)

    if op == "eq":
        return present and item_value == value
    if op == "neq":
        return not present or item_value != value
    if op == "in":
        if isinstance(value, list):
            return present and item_value in value
        return present and item_value == value
    if op == "nin":
        if isinstance(value, list):
            return not present or item_value not in value
        return not present or item_value != value
    if op in ("gt", "lt", "gte", "lte"):
        return present and _compare(item_value, op, value)
    if op == "contains":
        if isinstance(item_value, list):
            return value in item_value
        # Substring match only makes sense for string values
        return isinstance(value, str) and isinstance(item_value, str) and value in item_value
    if op == "like":
        return (
            isinstance(value, str)
            and isinstance(item_value, str)
            and value.lower() in item_value.lower()
        )
    if op == "isNull":
        return item_value is None
    if op == "isNotNull":
        return present and item_value is not None
    return False


def apply_filters(
    items: List[Dict[str, Any]], filters: Optional[List[FilterOption]]
) -> List[Dict[str, Any]]:
    """
    Keep the documents matching every filter.

    Args:
        items: Document data to filter
        filters: Conditions combined with AND (None or empty keeps everything)

    Returns:
        Filtered list, input order preserved

    Examples:
        >>> items = [{'status': 'active'}, {'status': 'inactive'}]
        >>> apply_filters(items, [FilterOption(field='status', op='eq', value='active')])
        [{'status': 'active'}]
    """
    if not filters:
        return list(items)

    return [item for item in items if all(matches_filter(item, f) for f in filters)]
