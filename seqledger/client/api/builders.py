"""Generic request builders shared by every resource.

Architecture:
    Builders collect settings through chained calls and freeze them into an
    immutable value (Query or a payload model) at submission time. Each
    builder is parameterized over the resource type instead of being
    duplicated per resource:
    - ListBuilder[T]: list operations returning Page[T] / ItemSequence[T]
    - SumBuilder[T]: sum operations, adds group_by
    - CreateBuilder[T]: one-shot create operations returning T
    - TagUpdateBuilder: update-*-tags operations returning SuccessMessage

Design Decisions:
    - The client is an explicit argument of every executing method
    - Builders never send anything until get_page/get_iterable/create/update
    - Reusing a builder after submission is safe; sent values are frozen

See Also:
    - Query: The immutable query model
    - ItemSequence: Lazy iteration over all pages
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, Generic, Self, TypeVar

from pydantic import BaseModel

from ..core.query import Query, QueryBuilder
from ..models.common import SuccessMessage, TagUpdate
from ..runtime.pagination import Invoker, ItemSequence, Page, fetch_page

T = TypeVar("T")


class ListBuilder(QueryBuilder, Generic[T]):
    """Fluent entry point for a paginated list operation.

    Example:
        >>> builder = (ListBuilder("list-accounts", Account)
        ...     .filter("tags.type=$1")
        ...     .add_filter_param("vip")
        ...     .page_size(2))
        >>> page = await builder.get_page(client)
        >>> async for account in builder.get_iterable(client):
        ...     print(account.id)
    """

    def __init__(self, operation: str, item_type: type[T]) -> None:
        super().__init__()
        self.operation = operation
        self.item_type = item_type

    async def get_page(self, client: Invoker, cursor: str | None = None) -> Page[T]:
        """Fetch exactly one page.

        Args:
            client: Client used to send the request
            cursor: Cursor from a previous page. When given, the request is a
                continuation built solely from it and the builder's filter
                settings are ignored.

        Returns:
            Page of items

        Raises:
            LedgerError: If the request fails
        """
        if cursor is not None:
            query = Query.continuation(cursor)
        else:
            query = self.build()
        outcome = await fetch_page(client, self.operation, query, self.item_type)
        return outcome.unwrap()

    def get_iterable(self, client: Invoker) -> ItemSequence[T]:
        """Return a lazy sequence over every matching item.

        No request is sent until the sequence is first advanced.
        """
        return ItemSequence(client, self.operation, self.build(), self.item_type)


class SumBuilder(ListBuilder[T]):
    """List builder for sum operations, which group results by fields."""

    def group_by(self, field: str) -> Self:
        """Add a field (e.g. ``"flavor_id"`` or ``"tags.type"``) to group by."""
        self._group_by.append(field)
        return self

    def group_by_fields(self, fields: Iterable[str]) -> Self:
        """Replace all group-by fields."""
        self._group_by = list(fields)
        return self


class CreateBuilder(ABC, Generic[T]):
    """One-shot builder creating a single resource.

    Subclasses define ``operation`` and ``result_type``, the fluent setters,
    and ``build()`` returning a frozen payload model.
    """

    operation: ClassVar[str]
    result_type: ClassVar[type]

    def __init__(self) -> None:
        self._idempotency_key: str | None = None

    def idempotency_key(self, key: str) -> Self:
        """Make the create safe to retry; the service deduplicates by key."""
        if not key:
            raise ValueError("idempotency key must be a non-empty string")
        self._idempotency_key = key
        return self

    @abstractmethod
    def build(self) -> BaseModel:
        """Freeze the accumulated fields into a payload model."""

    async def _submit(self, client: Invoker) -> T:
        outcome = await client.invoke(
            self.operation,
            self.build(),
            self.result_type,
            idempotency_key=self._idempotency_key,
        )
        return outcome.unwrap()

    async def create(self, client: Invoker) -> T:
        """Create the resource.

        Raises:
            LedgerError: If the request fails
        """
        return await self._submit(client)


class TagUpdateBuilder:
    """Builder replacing the tags of one resource.

    Tag updates carry the full tag set and are therefore idempotent; the
    transport may retry them.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        self._id: str | None = None
        self._tags: dict[str, Any] = {}

    def for_id(self, id: str) -> Self:
        """Select the resource to update."""
        self._id = id
        return self

    def tags(self, tags: Mapping[str, Any]) -> Self:
        """Set the new tag set."""
        self._tags = dict(tags)
        return self

    def add_tag(self, key: str, value: Any) -> Self:
        self._tags[key] = value
        return self

    def build(self) -> TagUpdate:
        if not self._id:
            raise ValueError("for_id() must be called before update")
        return TagUpdate(id=self._id, tags=dict(self._tags))

    async def update(self, client: Invoker) -> SuccessMessage:
        """Replace the resource's tags.

        Raises:
            LedgerError: If the request fails
        """
        outcome = await client.invoke(
            self.operation,
            self.build(),
            SuccessMessage,
            idempotent=True,
        )
        return outcome.unwrap()
