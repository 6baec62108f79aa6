"""
Subscription manager for live queries.

This module owns the lifecycle of the data-source subscriptions behind a
LiveQuery: one "result" subscription for the materialized query and, in
traditional pagination, one "count" subscription used to track the total
number of pages. Each role lives in a slot that is only ever replaced through
a swap that releases the old subscription before opening the new one.
"""

import logging
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

from ..models.config import QueryOptions
from ..models.pagination import (
    CountPages,
    FetchSuccess,
    PaginationEvent,
    PaginationMode,
    PaginationState,
    QueryChanged,
)
from ..models.query import QueryDescription
from ..models.source import QuerySource, Subscription, is_query_source
from ..utils.pagination import compute_page_count, normalize_emission, to_plain_value
from ..utils.query_materializer import count_query, materialize_query

logger = logging.getLogger(__name__)

ROLE_RESULT = "result"
ROLE_COUNT = "count"


class _LiveSubscription:
    """Bookkeeping for one subscription occupying a role slot."""

    def __init__(
        self,
        role: str,
        source: QuerySource,
        params: Tuple[Hashable, ...],
        description: QueryDescription,
    ):
        self.role = role
        self.source = source
        self.params = params
        self.description = description
        self.handle: Optional[Subscription] = None
        # Cleared as soon as the slot is released; emissions after that are stale
        self.active = True

    def matches(self, source: Any, params: Tuple[Hashable, ...]) -> bool:
        return self.source is source and self.params == params


class SubscriptionManager:
    """Keeps the result/count subscriptions in line with pagination state."""

    def __init__(
        self,
        dispatch: Callable[[PaginationEvent], None],
        get_state: Callable[[], PaginationState],
        get_source: Callable[[], Any],
        options: QueryOptions,
        mode: PaginationMode,
    ):
        """
        Initialize subscription manager.

        Args:
            dispatch: Callback feeding events into the reducer
            get_state: Returns the current pagination state
            get_source: Returns the current base query source (may be invalid/None)
            options: Query options
            mode: Pagination mode derived from options
        """
        self._dispatch = dispatch
        self._get_state = get_state
        self._get_source = get_source
        self.options = options
        self.mode = mode
        self._slots: Dict[str, Optional[_LiveSubscription]] = {ROLE_RESULT: None, ROLE_COUNT: None}
        self._syncing = False
        self._pending = False
        self._disposed = False

    @property
    def disposed(self) -> bool:
        """Whether the manager has been disposed."""
        return self._disposed

    @property
    def live_subscriptions(self) -> Dict[str, bool]:
        """Which roles currently hold a live subscription."""
        return {role: slot is not None for role, slot in self._slots.items()}

    def current_query(self, role: str = ROLE_RESULT) -> Optional[QueryDescription]:
        """Query description the live subscription of a role was opened with."""
        slot = self._slots.get(role)
        return slot.description if slot is not None else None

    def sync(self) -> None:
        """
        Bring subscriptions in line with the current source and state.

        Calls made while a sync is already running (events dispatched from
        inside a swap, synchronous emissions during subscribe) are coalesced:
        the running sync re-reads state and repeats until nothing changes.
        """
        if self._disposed:
            return
        if self._syncing:
            self._pending = True
            return

        self._syncing = True
        try:
            while True:
                self._pending = False
                self._sync_result()
                if self._disposed:
                    break
                self._sync_count()
                if self._disposed or not self._pending:
                    break
        finally:
            self._syncing = False

    def dispose(self) -> None:
        """Release every subscription. Emissions arriving afterwards are dropped."""
        if self._disposed:
            return
        self._disposed = True

        error: Optional[Exception] = None
        for role in (ROLE_RESULT, ROLE_COUNT):
            try:
                self._release(role)
            except Exception as e:
                error = error or e
        logger.debug("Subscription manager disposed")
        if error is not None:
            raise error

    def _result_params(self, state: PaginationState) -> Tuple[Hashable, ...]:
        return (
            self.options.page_size,
            self.mode,
            self.options.sort_by,
            self.options.sort_order,
            state.limit,
            state.page,
        )

    def _sync_result(self) -> None:
        source = self._get_source()
        state = self._get_state()
        params = self._result_params(state)
        slot = self._slots[ROLE_RESULT]

        if slot is not None and slot.matches(source, params):
            return

        if not is_query_source(source):
            # Nothing to subscribe to; drop whatever was open for the old query
            if slot is not None:
                self._release(ROLE_RESULT)
            logger.debug("Query source is not subscribable, skipping subscription")
            return

        self._dispatch(QueryChanged())
        if self._disposed:
            return

        # Listeners may have replaced the source or moved the state during the dispatch
        source = self._get_source()
        state = self._get_state()
        params = self._result_params(state)

        self._release(ROLE_RESULT)
        if not is_query_source(source):
            return
        description = materialize_query(state, self.options, self.mode)
        self._open(ROLE_RESULT, source, params, description, self._on_result)

    def _sync_count(self) -> None:
        source = self._get_source()
        state = self._get_state()
        params: Tuple[Hashable, ...] = (self.options.page_size,)
        slot = self._slots[ROLE_COUNT]

        wanted = (
            self.mode == PaginationMode.TRADITIONAL
            and state.page is not None
            and is_query_source(source)
        )
        if wanted and slot is not None and slot.matches(source, params):
            return

        self._release(ROLE_COUNT)
        if wanted:
            self._open(ROLE_COUNT, source, params, count_query(), self._on_count)

    def _open(
        self,
        role: str,
        source: QuerySource,
        params: Tuple[Hashable, ...],
        description: QueryDescription,
        handler: Callable[[_LiveSubscription, Any], None],
    ) -> None:
        record = _LiveSubscription(role, source, params, description)
        # Occupy the slot first: sources may emit synchronously from subscribe()
        self._slots[role] = record
        logger.debug("Opening %s subscription: %s", role, description)
        try:
            handle = source.subscribe(description, lambda payload: handler(record, payload))
        except Exception:
            record.active = False
            self._slots[role] = None
            raise

        record.handle = handle
        if not record.active:
            # Released (e.g. disposed) while the source was still emitting
            handle.unsubscribe()

    def _release(self, role: str) -> None:
        record = self._slots[role]
        if record is None:
            return

        record.active = False
        self._slots[role] = None
        if record.handle is None:
            return

        logger.debug("Releasing %s subscription: %s", role, record.description)
        try:
            record.handle.unsubscribe()
        except Exception as error:
            logger.warning("Failed to release %s subscription", role, exc_info=error)
            raise

    def _on_result(self, record: _LiveSubscription, payload: Any) -> None:
        if not record.active or self._disposed:
            logger.debug("Discarding emission from released %s subscription", record.role)
            return

        items = normalize_emission(payload)
        if self.options.as_plain_values:
            items = [to_plain_value(item) for item in items]
        self._dispatch(FetchSuccess(items=items))

    def _on_count(self, record: _LiveSubscription, payload: Any) -> None:
        if not record.active or self._disposed:
            logger.debug("Discarding emission from released %s subscription", record.role)
            return

        total = len(normalize_emission(payload))
        self._dispatch(CountPages(page_count=compute_page_count(total, self.options.page_size)))
