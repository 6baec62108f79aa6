"""
Configuration loader utility.

Loads query options from environment variables with sensible defaults.
"""

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from ..models.config import QueryOptions
from .sort import parse_sort_string

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def _read_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(
            f"{name} must be an integer", details={"variable": name, "value": raw}
        )


def _read_bool(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"{name} must be a boolean", details={"variable": name, "value": raw}
    )


def build_options(values: Dict[str, Any]) -> QueryOptions:
    """
    Validate a mapping of options (snake_case or camelCase keys).

    Args:
        values: Raw option values

    Returns:
        QueryOptions instance

    Raises:
        ConfigurationError: If any option is invalid
    """
    try:
        return QueryOptions(**values)
    except ValidationError as error:
        raise ConfigurationError(
            f"Invalid query options: {error.error_count()} validation error(s)",
            details={"errors": error.errors(include_url=False)},
        ) from error


def load_options(prefix: str = "LIVE_PAGER_") -> QueryOptions:
    """
    Load query options from environment variables with defaults.

    Optional environment variables (shown with the default prefix):
    - LIVE_PAGER_PAGE_SIZE (default: 0, no pagination)
    - LIVE_PAGER_STARTING_PAGE (enables traditional pagination)
    - LIVE_PAGER_SORT ('field' ascending, '-field' descending)
    - LIVE_PAGER_SORT_BY / LIVE_PAGER_SORT_ORDER (override LIVE_PAGER_SORT)
    - LIVE_PAGER_JSON (emit plain values)

    Args:
        prefix: Environment variable prefix

    Returns:
        QueryOptions instance

    Raises:
        ConfigurationError: If a variable holds a malformed value
    """
    load_dotenv()

    values: Dict[str, Any] = {}

    page_size = _read_int(f"{prefix}PAGE_SIZE")
    if page_size is not None:
        values["page_size"] = page_size

    starting_page = _read_int(f"{prefix}STARTING_PAGE")
    if starting_page is not None:
        values["starting_page"] = starting_page

    sort_option = parse_sort_string(os.environ.get(f"{prefix}SORT"))
    if sort_option:
        values["sort_by"] = sort_option.field
        values["sort_order"] = sort_option.order

    sort_by = os.environ.get(f"{prefix}SORT_BY")
    if sort_by and sort_by.strip():
        values["sort_by"] = sort_by.strip()

    sort_order = os.environ.get(f"{prefix}SORT_ORDER")
    if sort_order and sort_order.strip():
        values["sort_order"] = sort_order.strip().lower()

    as_plain_values = _read_bool(f"{prefix}JSON")
    if as_plain_values is not None:
        values["as_plain_values"] = as_plain_values

    return build_options(values)
