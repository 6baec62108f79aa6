"""Service implementations for live-pager."""

from .memory import InMemoryCollection, InMemoryDatabase
from .subscription import SubscriptionManager

__all__ = [
    "InMemoryCollection",
    "InMemoryDatabase",
    "SubscriptionManager",
]
