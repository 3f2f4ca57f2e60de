"""
Lazy pagination over link-header paginated JSON collections.

A ``Pagination`` is an immutable, reusable description of a collection: where
the first page lives and how to turn each raw JSON object into a value.
Iterating it creates a fresh ``PaginatedIterator`` every time, which fetches
pages only when its buffer runs dry and follows ``rel="next"`` links until a
page declares no successor.

Usage:
    followers = Pagination(Cursor.of(url, {"per_page": 100}), User.from_json, fetcher)
    for user in followers:
        print(user.login)
"""

import threading
from contextlib import nullcontext
from dataclasses import dataclass, field, replace
from typing import Any, Callable, ContextManager, Dict, Generic, Iterator, Optional, Tuple, TypeVar

from ._logging import logger
from .errors import ExhaustionError, GhPagerError
from .fetcher import Cursor, PageFetcher

T = TypeVar("T")
U = TypeVar("U")

# Pure function from one raw JSON object to a typed value
Mapping = Callable[[Dict[str, Any]], T]


@dataclass(frozen=True)
class Pagination(Generic[T]):
    """
    Restartable sequence of mapped items from a paginated endpoint.

    Attributes:
        entry: Cursor of the first page
        mapping: Applied once to every raw item as it is consumed
        fetcher: Turns cursors into pages
        throttle: Optional context manager (e.g. a ``threading.Semaphore``)
            held around every fetch. Share one between paginations to bound
            how many of their fetches run at once.
    """

    entry: Cursor
    mapping: Mapping[T]
    fetcher: PageFetcher = field(compare=False, repr=False)
    throttle: Optional[ContextManager[Any]] = field(default=None, compare=False, repr=False)

    @property
    def request(self) -> Cursor:
        """Cursor of the first page."""
        return self.entry

    def iterator(self) -> "PaginatedIterator[T]":
        """Start a new traversal from the first page."""
        return PaginatedIterator(self.entry, self.mapping, self.fetcher, self.throttle)

    def __iter__(self) -> "PaginatedIterator[T]":
        return self.iterator()

    def map(self, fn: Callable[[T], U]) -> "Pagination[U]":
        """Same collection, with ``fn`` applied after the current mapping."""
        mapping = self.mapping
        return replace(self, mapping=lambda obj: fn(mapping(obj)))

    def __str__(self) -> str:
        return self.entry.uri


class PaginatedIterator(Iterator[T]):
    """
    Single-use traversal of a paginated collection.

    Holds the cursor of the next page to fetch, a snapshot of the current
    page's raw items with an index into it, and whether more pages exist.
    A page is fetched only when every item of the previous one has been
    consumed. A failed fetch is final: the error is raised again on every
    later call instead of touching the network.

    ``has_next()`` and ``next()`` are atomic with respect to other threads
    using the same iterator; separate iterators never block each other
    unless they share a throttle.
    """

    def __init__(
        self,
        entry: Cursor,
        mapping: Mapping[T],
        fetcher: PageFetcher,
        throttle: Optional[ContextManager[Any]] = None,
    ):
        self.cursor = entry
        self.mapping = mapping
        self.fetcher = fetcher
        self.throttle = throttle
        self.page: Tuple[Dict[str, Any], ...] = ()
        self.index = 0
        self.has_more = True
        self.error: Optional[GhPagerError] = None
        self._lock = threading.RLock()

    def has_next(self) -> bool:
        """Whether another item is available, fetching pages if needed."""
        with self._lock:
            if self.error is not None:
                raise self.error
            # Pages may legitimately be empty while still linking onwards
            while self.index >= len(self.page) and self.has_more:
                self._fetch()
            return self.index < len(self.page)

    def next(self) -> T:
        """Consume the next item and return it mapped.

        Raises:
            ExhaustionError: If ``has_next()`` is False
        """
        with self._lock:
            if not self.has_next():
                raise ExhaustionError()
            item = self.page[self.index]
            self.index += 1
            return self.mapping(item)

    def __iter__(self) -> "PaginatedIterator[T]":
        return self

    def __next__(self) -> T:
        with self._lock:
            if not self.has_next():
                raise StopIteration
            return self.next()

    def _fetch(self) -> None:
        """Replace the buffer with the page at the cursor and advance the cursor."""
        try:
            with self.throttle or nullcontext():
                page = self.fetcher.fetch(self.cursor)
        except GhPagerError as e:
            self.error = e
            raise

        if page.next is None:
            self.has_more = False
            logger.debug("Reached last page", extra={"url": self.cursor.uri})
        else:
            self.cursor = page.next
        self.page = page.items
        self.index = 0
