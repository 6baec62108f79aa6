"""Concrete query description handed to a data source."""

from typing import Optional

from pydantic import BaseModel, Field

from .config import SortOrder


class QueryDescription(BaseModel):
    """
    Bounded/sorted query parameters derived from pagination state.

    A field set to None means "unconstrained".
    """

    skip: Optional[int] = Field(default=None, ge=0, description="Number of items to skip")
    limit: Optional[int] = Field(default=None, ge=0, description="Maximum number of items")
    sort_by: Optional[str] = Field(default=None, description="Sort field")
    sort_order: Optional[SortOrder] = Field(default=None, description="Sort order")

    class Config:
        frozen = True
