"""
Library exceptions.

This module defines the exceptions raised by live-pager. The pagination state
machine itself never raises for consumer calls; these cover configuration and
the in-memory data source.
"""

from typing import Any, Dict, Optional


class LivePagerError(Exception):
    """Base exception for live-pager errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize live-pager error.

        Args:
            message: Error message
            details: Optional structured context (offending field, value, etc.)
        """
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else {}


class ConfigurationError(LivePagerError):
    """Raised when query options or environment configuration are invalid."""

    pass


class CollectionError(LivePagerError):
    """Raised when the in-memory data source is misused."""

    pass
