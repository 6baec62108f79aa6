"""
Shared pytest fixtures for live-pager tests.
"""

from typing import Any, Callable, List

import pytest

from live_pager.models.query import QueryDescription
from live_pager.services.memory import InMemoryCollection, InMemoryDatabase

CHARACTERS = [
    {"id": "1", "name": "Darth Vader", "affiliation": "Empire"},
    {"id": "2", "name": "Yoda", "affiliation": "Jedi"},
    {"id": "3", "name": "Han Solo", "affiliation": "Rebels"},
    {"id": "4", "name": "Leia Organa", "affiliation": "Rebels"},
    {"id": "5", "name": "Obi-Wan Kenobi", "affiliation": "Jedi"},
]


class ManualSubscription:
    """Subscription handle whose emissions are driven by the test."""

    def __init__(
        self, source: "ManualSource", description: QueryDescription, on_next: Callable[[Any], None]
    ):
        self.source = source
        self.description = description
        self.on_next = on_next
        self.closed = False
        self.unsubscribe_calls = 0

    def unsubscribe(self) -> None:
        self.unsubscribe_calls += 1
        self.source.log.append(("unsubscribe", self))
        self.closed = True

    def emit(self, payload: Any) -> None:
        # Deliberately delivers even after unsubscribe, like an in-flight event
        self.on_next(payload)


class ManualSource:
    """QuerySource test double that never emits on its own."""

    def __init__(self, valid: bool = True):
        self.valid = valid
        self.subscriptions: List[ManualSubscription] = []
        # Ordered record of ("subscribe" | "unsubscribe", subscription)
        self.log: List[Any] = []

    def is_valid(self) -> bool:
        return self.valid

    def subscribe(self, description: QueryDescription, on_next: Callable[[Any], None]):
        subscription = ManualSubscription(self, description, on_next)
        self.subscriptions.append(subscription)
        self.log.append(("subscribe", subscription))
        return subscription

    @property
    def open_subscriptions(self) -> List[ManualSubscription]:
        return [s for s in self.subscriptions if not s.closed]

    @property
    def bounded_subscriptions(self) -> List[ManualSubscription]:
        """Result subscriptions in paginated modes (they always carry a limit)."""
        return [s for s in self.subscriptions if s.description.limit is not None]

    @property
    def count_subscriptions(self) -> List[ManualSubscription]:
        return [s for s in self.subscriptions if s.description == QueryDescription()]

    @property
    def latest(self) -> ManualSubscription:
        return self.subscriptions[-1]


@pytest.fixture
def manual_source():
    """Query source emitting only when the test says so."""
    return ManualSource()


@pytest.fixture
def database():
    """In-memory database, destroyed after the test."""
    db = InMemoryDatabase()
    yield db
    db.destroy()


@pytest.fixture
def collection(database) -> InMemoryCollection:
    """Collection pre-populated with characters."""
    characters = database.create_collection("characters")
    characters.bulk_insert(CHARACTERS)
    return characters


@pytest.fixture
def numbered_collection(database) -> InMemoryCollection:
    """Collection with 12 numbered documents (n = 1..12)."""
    numbers = database.create_collection("numbers")
    numbers.bulk_insert([{"id": f"n{n:02d}", "n": n} for n in range(1, 13)])
    return numbers


@pytest.fixture
def source_class():
    """ManualSource class, for tests that need extra or customised sources."""
    return ManualSource
