"""
Data source protocols.

A live query is driven off an external reactive store. These protocols
describe the only capabilities live-pager needs from it: a validity check and
a push-based subscription for a bounded/sorted query description.
"""

from typing import Any, Callable, Protocol, runtime_checkable

from .query import QueryDescription

# Emission payload: a list of items, a single item, or None
OnNext = Callable[[Any], None]


@runtime_checkable
class Subscription(Protocol):
    """Disposable handle returned by QuerySource.subscribe."""

    def unsubscribe(self) -> None: ...


@runtime_checkable
class QuerySource(Protocol):
    """Base query of a reactive store that can be subscribed to."""

    def is_valid(self) -> bool: ...

    def subscribe(self, description: QueryDescription, on_next: OnNext) -> Subscription: ...


def is_query_source(obj: Any) -> bool:
    """
    Check whether an object is a subscribable query source.

    Args:
        obj: Candidate query source (may be None)

    Returns:
        True if obj implements QuerySource and reports itself valid
    """
    return isinstance(obj, QuerySource) and bool(obj.is_valid())
