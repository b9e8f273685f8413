"""Lazy iteration over every item of a paginated query.

Architecture:
    ItemSequence owns at most one Page at a time. Advancing returns the next
    buffered item; only when the page is used up and the server has not
    flagged it as the last one does the sequence issue another fetch, using
    the page's cursor as the sole content of a continuation Query.

Design Decisions:
    - Pull-based: no I/O until the consumer asks for an item past the buffer
    - No prefetch: page N+1 is never requested before page N is consumed
    - Terminal states: an exhausted sequence stays exhausted; a failed fetch
      leaves the sequence failed and re-raises the same error
    - The client is passed in explicitly; the sequence never reaches for
      global state
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from time import perf_counter
from typing import Any, Generic, Protocol, TypeVar

from ...core.exceptions import DecodeError, LedgerError
from ...core.outcome import Outcome
from ...core.query import Query
from .page import Page
from .telemetry import log_page_error, log_page_fetched, log_sequence_exhausted

T = TypeVar("T")


class Invoker(Protocol):
    """Anything that can execute a ledger operation (Client, RESTTransport)."""

    async def invoke(
        self,
        operation: str,
        payload: Any,
        result_type: Any,
        *,
        idempotent: bool = False,
        idempotency_key: str | None = None,
    ) -> Outcome[Any]: ...


async def fetch_page(
    client: Invoker,
    operation: str,
    query: Query,
    item_type: type[T],
) -> Outcome[Page[T]]:
    """Fetch one page. Page fetches are idempotent and therefore retried."""
    return await client.invoke(operation, query, Page[item_type], idempotent=True)


class ItemSequence(Generic[T]):
    """Forward-only async iterator over all items matching a query.

    Not safe for concurrent advancement from several tasks.

    Example:
        >>> async for account in accounts.list_accounts().get_iterable(client):
        ...     print(account.id)
    """

    def __init__(
        self,
        client: Invoker,
        operation: str,
        query: Query,
        item_type: type[T],
    ) -> None:
        self._client = client
        self._operation = operation
        self._seed = query
        self._item_type = item_type
        self._page: Page[T] | None = None
        self._position = 0
        self._exhausted = False
        self._error: LedgerError | None = None
        self._pages_fetched = 0
        self._items_yielded = 0

    @property
    def cursor(self) -> str | None:
        """Cursor of the most recently fetched page (None before the first fetch).

        Persist it to resume later with ``ListBuilder.get_page(client, cursor=...)``.
        """
        return self._page.cursor if self._page is not None else None

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def error(self) -> LedgerError | None:
        """Failure that ended the sequence, if any."""
        return self._error

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        if self._error is not None:
            raise self._error

        while True:
            # 1. Buffered item: no network call
            if self._page is not None and self._position < len(self._page.items):
                item = self._page.items[self._position]
                self._position += 1
                self._items_yielded += 1
                return item

            # 2. Last page consumed
            if self._exhausted or (self._page is not None and self._page.last_page):
                if not self._exhausted:
                    self._exhausted = True
                    log_sequence_exhausted(
                        operation=self._operation,
                        pages_fetched=self._pages_fetched,
                        items_yielded=self._items_yielded,
                    )
                raise StopAsyncIteration

            # 3. Fetch the next page and start over
            await self._fetch_next()

    async def _fetch_next(self) -> None:
        query = self._seed if self._page is None else Query.continuation(self._page.cursor)
        started = perf_counter()
        outcome = await fetch_page(self._client, self._operation, query, self._item_type)
        if not outcome.ok:
            self._error = outcome.error
            log_page_error(
                operation=self._operation,
                page_index=self._pages_fetched,
                error_kind=outcome.error.kind.value,
                error_message=str(outcome.error),
            )
            raise outcome.error

        page = outcome.value
        if not page.last_page and not page.cursor:
            self._error = DecodeError(
                f"{self._operation} returned a non-final page without a cursor"
            )
            log_page_error(
                operation=self._operation,
                page_index=self._pages_fetched,
                error_kind=self._error.kind.value,
                error_message=str(self._error),
            )
            raise self._error

        log_page_fetched(
            operation=self._operation,
            page_index=self._pages_fetched,
            items=len(page.items),
            last_page=page.last_page,
            continuation=query.is_continuation,
            latency_ms=(perf_counter() - started) * 1000.0,
        )
        self._page = page
        self._position = 0
        self._pages_fetched += 1

    async def collect(self, limit: int | None = None) -> list[T]:
        """Drain the sequence into a list, stopping after ``limit`` items."""
        if limit is not None and limit < 0:
            raise ValueError("limit must be non-negative")
        items: list[T] = []
        if limit == 0:
            return items
        async for item in self:
            items.append(item)
            if limit is not None and len(items) >= limit:
                break
        return items
