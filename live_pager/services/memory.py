"""
In-memory reactive data source.

This module provides a small reactive document store implementing the
QuerySource protocol: every open subscription receives the current result on
subscribe and again after each mutation of its collection. It is used by the
test suite and works as a drop-in data source for prototypes.
"""

import copy
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..errors import CollectionError
from ..models.filter import FilterOption
from ..models.query import QueryDescription
from ..utils.filter import apply_filters, matches_filter
from ..utils.sort import apply_sort

logger = logging.getLogger(__name__)


class Document:
    """Record handle for a stored document."""

    def __init__(self, collection_name: str, primary_key: str, data: Dict[str, Any]):
        self.collection_name = collection_name
        self.primary_key = primary_key
        self._data = copy.deepcopy(data)

    @property
    def primary(self) -> Any:
        """Primary key value."""
        return self._data[self.primary_key]

    @property
    def data(self) -> Dict[str, Any]:
        """Stored data (read-only by convention; use to_json() for a copy)."""
        return self._data

    def get(self, field: str, default: Any = None) -> Any:
        return self._data.get(field, default)

    def __getitem__(self, field: str) -> Any:
        return self._data[field]

    def to_json(self) -> Dict[str, Any]:
        """Plain-value copy of the document."""
        return copy.deepcopy(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.collection_name == other.collection_name and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Document({self.collection_name}:{self.primary!r})"


class CollectionSubscription:
    """Handle for an open collection subscription."""

    def __init__(
        self,
        collection: "InMemoryCollection",
        query: "CollectionQuery",
        description: QueryDescription,
        on_next: Callable[[Any], None],
    ):
        self._collection = collection
        self._query = query
        self._description = description
        self._on_next = on_next
        self.closed = False

    def push(self) -> None:
        """Evaluate the query and deliver the result."""
        if self.closed:
            return
        self._on_next(self._query.execute(self._description))

    def unsubscribe(self) -> None:
        """Stop receiving results. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        self._collection._remove_subscription(self)


class CollectionQuery:
    """Base query over a collection: a filter selector, optionally single-result."""

    def __init__(
        self,
        collection: "InMemoryCollection",
        filters: Optional[List[FilterOption]] = None,
        single: bool = False,
    ):
        self.collection = collection
        self.filters = list(filters) if filters else []
        self.single = single

    def is_valid(self) -> bool:
        return not self.collection.destroyed

    def execute(self, description: Optional[QueryDescription] = None) -> Any:
        """
        Evaluate the query once.

        Order of evaluation: filter, sort, skip, limit. Single-result queries
        return the first match or None.

        Args:
            description: Optional skip/limit/sort constraints

        Returns:
            List of Documents, or a Document/None for single-result queries
        """
        description = description or QueryDescription()
        documents = [
            doc
            for doc in self.collection.documents
            if all(matches_filter(doc.data, f) for f in self.filters)
        ]
        documents = apply_sort(documents, description.sort_by, description.sort_order)

        start = description.skip or 0
        if description.limit is not None:
            documents = documents[start : start + description.limit]
        else:
            documents = documents[start:]

        if self.single:
            return documents[0] if documents else None
        return documents

    def subscribe(
        self, description: QueryDescription, on_next: Callable[[Any], None]
    ) -> CollectionSubscription:
        """
        Subscribe to the query result.

        The current result is delivered before this method returns.

        Raises:
            CollectionError: If the collection has been destroyed
        """
        if self.collection.destroyed:
            raise CollectionError(
                f"Collection '{self.collection.name}' has been destroyed",
                details={"collection": self.collection.name},
            )
        subscription = CollectionSubscription(self.collection, self, description, on_next)
        self.collection._add_subscription(subscription)
        subscription.push()
        return subscription

    def __repr__(self) -> str:
        return (
            f"CollectionQuery({self.collection.name}, "
            f"filters={len(self.filters)}, single={self.single})"
        )


class InMemoryCollection:
    """Named, insertion-ordered set of documents keyed by a primary field."""

    def __init__(self, name: str, primary_key: str = "id"):
        self.name = name
        self.primary_key = primary_key
        self._documents: Dict[Any, Document] = {}
        self._subscriptions: List[CollectionSubscription] = []
        self._destroyed = False

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def documents(self) -> List[Document]:
        """Stored documents in insertion order."""
        return list(self._documents.values())

    @property
    def subscription_count(self) -> int:
        """Number of open subscriptions."""
        return len(self._subscriptions)

    def _ensure_usable(self) -> None:
        if self._destroyed:
            raise CollectionError(
                f"Collection '{self.name}' has been destroyed", details={"collection": self.name}
            )

    def _make_document(self, data: Dict[str, Any]) -> Document:
        if self.primary_key not in data or data[self.primary_key] is None:
            raise CollectionError(
                f"Document is missing primary key '{self.primary_key}'",
                details={"collection": self.name, "primary_key": self.primary_key},
            )
        return Document(self.name, self.primary_key, data)

    def insert(self, data: Dict[str, Any]) -> Document:
        """
        Insert a new document.

        Raises:
            CollectionError: On a missing or duplicate primary key
        """
        return self.bulk_insert([data])[0]

    def bulk_insert(self, items: Iterable[Dict[str, Any]]) -> List[Document]:
        """
        Insert several documents with a single change notification.

        Either all documents are inserted or none are.

        Raises:
            CollectionError: On a missing or duplicate primary key
        """
        self._ensure_usable()
        documents = [self._make_document(item) for item in items]

        seen = set(self._documents)
        for document in documents:
            if document.primary in seen:
                raise CollectionError(
                    f"Duplicate primary key {document.primary!r}",
                    details={"collection": self.name, "primary": document.primary},
                )
            seen.add(document.primary)

        for document in documents:
            self._documents[document.primary] = document
        if documents:
            self._notify()
        return documents

    def upsert(self, data: Dict[str, Any]) -> Document:
        """Insert or replace a document (replacement keeps its position)."""
        self._ensure_usable()
        document = self._make_document(data)
        self._documents[document.primary] = document
        self._notify()
        return document

    def remove(self, primary: Any) -> bool:
        """
        Remove a document by primary key.

        Returns:
            True if a document was removed
        """
        self._ensure_usable()
        if primary not in self._documents:
            return False
        del self._documents[primary]
        self._notify()
        return True

    def find(self, filters: Optional[List[FilterOption]] = None) -> CollectionQuery:
        """Query all documents matching the filters."""
        return CollectionQuery(self, filters)

    def find_one(self, filters: Optional[List[FilterOption]] = None) -> CollectionQuery:
        """Query the first document matching the filters."""
        return CollectionQuery(self, filters, single=True)

    def count(self, filters: Optional[List[FilterOption]] = None) -> int:
        """Number of documents matching the filters."""
        return len(apply_filters([doc.data for doc in self._documents.values()], filters))

    def destroy(self) -> None:
        """Drop all documents and close every open subscription."""
        if self._destroyed:
            return
        self._destroyed = True
        for subscription in list(self._subscriptions):
            subscription.closed = True
        self._subscriptions.clear()
        self._documents.clear()
        logger.debug("Collection '%s' destroyed", self.name)

    def _add_subscription(self, subscription: CollectionSubscription) -> None:
        self._subscriptions.append(subscription)

    def _remove_subscription(self, subscription: CollectionSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _notify(self) -> None:
        # Subscribers may (un)subscribe while being notified; iterate a snapshot
        for subscription in list(self._subscriptions):
            subscription.push()


class InMemoryDatabase:
    """Registry of named in-memory collections."""

    def __init__(self, name: str = "live_pager"):
        self.name = name
        self._collections: Dict[str, InMemoryCollection] = {}
        self._listeners: List[Callable[[InMemoryCollection], None]] = []

    @property
    def collection_names(self) -> List[str]:
        return list(self._collections)

    def on(self, callback: Callable[[InMemoryCollection], None]) -> None:
        """
        Register a listener called with every newly created collection.

        Args:
            callback: Function receiving the created collection
        """
        if callback not in self._listeners:
            self._listeners.append(callback)

    def off(self, callback: Callable[[InMemoryCollection], None]) -> None:
        """
        Unregister a collection listener.

        Args:
            callback: Callback function to remove from listeners
        """
        if callback in self._listeners:
            self._listeners.remove(callback)

    def create_collection(self, name: str, primary_key: str = "id") -> InMemoryCollection:
        """
        Create a collection.

        Raises:
            CollectionError: If a collection with that name already exists
        """
        if name in self._collections:
            raise CollectionError(
                f"Collection '{name}' already exists", details={"collection": name}
            )
        collection = InMemoryCollection(name, primary_key)
        self._collections[name] = collection
        # Listeners may unregister themselves when called
        for listener in list(self._listeners):
            listener(collection)
        return collection

    def get_collection(self, name: str) -> Optional[InMemoryCollection]:
        return self._collections.get(name)

    def destroy(self) -> None:
        """Destroy every collection."""
        for collection in self._collections.values():
            collection.destroy()
        self._collections.clear()
        self._listeners.clear()
