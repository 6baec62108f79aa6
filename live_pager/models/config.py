"""
Configuration types for live-pager.

This module contains the Pydantic model describing how a live query is
paginated and sorted. Options are immutable for the lifetime of a LiveQuery.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

SortOrder = Literal["asc", "desc"]


class QueryOptions(BaseModel):
    """Pagination and sorting options for a live query.

    Fields:
    - page_size: Batch/page size; 0 disables pagination
    - starting_page: 1-based starting page; enables traditional pagination
    - sort_by: Field to order results by
    - sort_order: asc or desc (default: desc)
    - as_plain_values (alias json): Emit plain values instead of record handles
    """

    page_size: int = Field(
        default=0, ge=0, alias="pageSize", description="Page size (0 = no pagination)"
    )
    starting_page: Optional[int] = Field(
        default=None, ge=1, alias="startingPage", description="Starting page (1-based)"
    )
    sort_by: Optional[str] = Field(default=None, alias="sortBy", description="Sort field")
    sort_order: SortOrder = Field(default="desc", alias="sortOrder", description="Sort order")
    as_plain_values: bool = Field(
        default=False, alias="json", description="Convert records to plain values"
    )

    class Config:
        populate_by_name = True  # Allow both snake_case and camelCase
        frozen = True


class SortOption(BaseModel):
    """Single sort instruction (field + direction)."""

    field: str = Field(..., description="Field name to sort by")
    order: SortOrder = Field(default="asc", description="Sort direction")
