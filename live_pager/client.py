"""
LiveQuery - reactive, paginated view over a live query.

This module contains the LiveQuery class: the consumer-facing surface that
owns the pagination state, feeds events into the reducer and keeps the
data-source subscriptions in line with the state.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .models.config import QueryOptions
from .models.pagination import (
    FetchMore,
    FetchPage,
    PaginationEvent,
    PaginationMode,
    PaginationState,
    QueryResult,
    Reset,
)
from .models.query import QueryDescription
from .models.source import QuerySource
from .services.subscription import ROLE_RESULT, SubscriptionManager
from .utils.config_loader import build_options
from .utils.pagination import create_initial_state, reduce, select_mode

logger = logging.getLogger(__name__)

OptionsInput = Union[QueryOptions, Mapping[str, Any], None]
QueryConstructor = Callable[[Any], Optional[QuerySource]]


class LiveQuery:
    """
    Reactive, paginated view over a live query.

    Subscribes to the query source and keeps `result` up to date as the
    underlying data changes, while exposing:
    - state indicators for fetching and list depletion
    - fetch_more() for infinite scroll
    - fetch_page() for traditional pagination
    - reset_list() for shrinking an infinite-scroll list back to one batch
    """

    def __init__(self, query: Optional[QuerySource], options: OptionsInput = None):
        """
        Initialize LiveQuery and subscribe to the query source.

        Args:
            query: Base query source; an invalid or missing source leaves the
                instance unsubscribed until set_query() provides a valid one
            options: QueryOptions or a mapping of option values
                (snake_case or camelCase keys)

        Raises:
            ConfigurationError: If options is a mapping with invalid values
        """
        if isinstance(options, QueryOptions):
            self.options = options
        else:
            self.options = build_options(dict(options or {}))

        self.mode = select_mode(self.options.page_size, self.options.starting_page)
        self._query = query
        self._state = create_initial_state(self.options, self.mode)
        self._listeners: List[Callable[[QueryResult], None]] = []
        self._disposed = False
        self._on_dispose: List[Callable[[], None]] = []
        self._subscriptions = SubscriptionManager(
            self._dispatch,
            lambda: self._state,
            lambda: self._query,
            self.options,
            self.mode,
        )
        self._subscriptions.sync()

    @classmethod
    def for_collection(
        cls,
        collection: Any,
        query_constructor: Optional[QueryConstructor],
        options: OptionsInput = None,
    ) -> "LiveQuery":
        """
        Build a LiveQuery from a collection and a query constructor.

        The constructor receives the collection and returns the base query.
        A missing collection or constructor, or a constructor returning
        something that is not a query, yields an unsubscribed instance.

        Args:
            collection: Collection (may be None while not yet available)
            query_constructor: Callable building the base query from the collection
            options: QueryOptions or a mapping of option values

        Returns:
            LiveQuery instance
        """
        query: Optional[QuerySource] = None
        if collection is not None and callable(query_constructor):
            query = query_constructor(collection)
        return cls(query, options)

    @classmethod
    def for_database(
        cls,
        database: Any,
        name: str,
        query_constructor: Optional[QueryConstructor],
        options: OptionsInput = None,
    ) -> "LiveQuery":
        """
        Build a LiveQuery from a collection looked up by name.

        When the database has no such collection yet, the instance stays
        unsubscribed and picks the collection up as soon as the database
        creates it (the database must support `on`/`off` collection
        listeners, as InMemoryDatabase does).

        Args:
            database: Database exposing get_collection(name), on() and off()
            name: Collection name
            query_constructor: Callable building the base query from the collection
            options: QueryOptions or a mapping of option values

        Returns:
            LiveQuery instance

        Examples:
            >>> live = LiveQuery.for_database(db, "characters", lambda c: c.find())
            >>> db.create_collection("characters")  # live subscribes here
        """
        collection = database.get_collection(name)
        live = cls.for_collection(collection, query_constructor, options)
        if collection is not None:
            return live

        def attach(created: Any) -> None:
            if created.name != name:
                return
            database.off(attach)
            if callable(query_constructor):
                live.set_query(query_constructor(created))

        database.on(attach)
        live._on_dispose.append(lambda: database.off(attach))
        logger.debug("Waiting for collection '%s' to be created", name)
        return live

    # ==================== STATE ====================

    @property
    def state(self) -> PaginationState:
        """Current pagination state."""
        return self._state

    @property
    def result(self) -> List[Any]:
        """Current items (record handles, or plain values when json is enabled)."""
        return self._state.result

    @property
    def is_fetching(self) -> bool:
        return self._state.is_fetching

    @property
    def is_exhausted(self) -> bool:
        return self._state.is_exhausted

    @property
    def page_count(self) -> int:
        return self._state.page_count

    @property
    def current_page(self) -> Optional[int]:
        return self._state.page

    @property
    def query(self) -> Optional[QuerySource]:
        """Base query source."""
        return self._query

    @property
    def materialized_query(self) -> Optional[QueryDescription]:
        """Query description of the live result subscription, if any."""
        return self._subscriptions.current_query(ROLE_RESULT)

    @property
    def live_subscriptions(self) -> Dict[str, bool]:
        """Which subscription roles ('result', 'count') are currently live."""
        return self._subscriptions.live_subscriptions

    @property
    def disposed(self) -> bool:
        return self._disposed

    def snapshot(self) -> QueryResult:
        """Read-only view of the current state."""
        return QueryResult(
            result=list(self._state.result),
            is_fetching=self._state.is_fetching,
            is_exhausted=self._state.is_exhausted,
            page_count=self._state.page_count,
            current_page=self._state.page,
        )

    # ==================== LISTENERS ====================

    def on(self, callback: Callable[[QueryResult], None]) -> None:
        """
        Register a listener called with a QueryResult after every state change.

        Args:
            callback: Function receiving the new QueryResult
        """
        if callback not in self._listeners:
            self._listeners.append(callback)

    def off(self, callback: Callable[[QueryResult], None]) -> None:
        """
        Unregister a listener.

        Args:
            callback: Callback function to remove from listeners
        """
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ==================== CONTROLS ====================

    def fetch_more(self) -> None:
        """Request one more batch. Only meaningful in infinite-scroll mode."""
        if self._disposed:
            return
        if self.mode != PaginationMode.INFINITE_SCROLL:
            logger.debug("fetch_more ignored in %s mode", self.mode.value)
            return
        if self._state.is_fetching or self._state.is_exhausted:
            logger.debug("fetch_more ignored: fetching or exhausted")
            return
        self._dispatch(FetchMore(page_size=self.options.page_size))

    def fetch_page(self, page: int) -> None:
        """
        Request a specific page. Only meaningful in traditional mode.

        Args:
            page: 1-based page number, at most page_count
        """
        if self._disposed:
            return
        if self.mode != PaginationMode.TRADITIONAL:
            logger.debug("fetch_page ignored in %s mode", self.mode.value)
            return
        if page < 0 or page > self._state.page_count:
            logger.debug("fetch_page(%s) ignored: out of range 0..%s", page, self._state.page_count)
            return
        self._dispatch(FetchPage(page=page))

    def reset_list(self) -> None:
        """Shrink an infinite-scroll list back to its first batch."""
        if self._disposed:
            return
        if self.mode != PaginationMode.INFINITE_SCROLL:
            logger.debug("reset_list ignored in %s mode", self.mode.value)
            return
        if self._state.limit <= self.options.page_size:
            logger.debug("reset_list ignored: nothing to reset")
            return
        self._dispatch(Reset(page_size=self.options.page_size))

    def set_query(self, query: Optional[QuerySource]) -> None:
        """
        Replace the base query source and re-subscribe.

        Args:
            query: New base query source
        """
        if self._disposed or query is self._query:
            return
        self._query = query
        self._subscriptions.sync()

    # ==================== LIFECYCLE ====================

    def dispose(self) -> None:
        """Release all subscriptions. No event is dispatched afterwards."""
        if self._disposed:
            return
        self._disposed = True
        self._listeners.clear()
        for callback in self._on_dispose:
            callback()
        self._on_dispose.clear()
        self._subscriptions.dispose()
        logger.debug("LiveQuery disposed")

    def __enter__(self) -> "LiveQuery":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()

    def _dispatch(self, event: PaginationEvent) -> None:
        if self._disposed:
            return
        self._state = reduce(self._state, event)

        if self._listeners:
            snapshot = self.snapshot()
            for listener in list(self._listeners):
                listener(snapshot)

        self._subscriptions.sync()


