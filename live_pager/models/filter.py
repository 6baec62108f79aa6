"""
Filter types for the in-memory data source.

This module contains the Pydantic model describing a single field filter
(`field`, `op`, `value`) used to build collection queries.
"""

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field

FilterOperator = Literal[
    "eq",
    "neq",
    "in",
    "nin",
    "gt",
    "lt",
    "gte",
    "lte",
    "contains",
    "like",
    "isNull",
    "isNotNull",
]


class FilterOption(BaseModel):
    """
    Single filter condition.

    Fields:
        field: Document field name
        op: Filter operator
        value: Comparison value (list for in/nin, unused for isNull/isNotNull)
    """

    field: str = Field(..., description="Field name to filter on")
    op: FilterOperator = Field(..., description="Filter operator")
    value: Optional[Union[str, int, float, bool, List[Any]]] = Field(
        default=None, description="Filter value"
    )

    class Config:
        frozen = True
