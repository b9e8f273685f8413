"""Immutable query model and fluent builder.

Architecture:
    QueryBuilder accumulates filter and pagination settings through chained
    calls; build() returns a frozen Query value, so a Query that has been
    sent can never change underneath an in-flight iteration. A Query is
    either a fresh query (filter, params, grouping, page size) or a
    continuation carrying only a server-issued cursor.

Design Decisions:
    - Pydantic frozen model: validation at construction, no mutation after
    - Cursor is opaque: stored and replayed verbatim, never parsed
    - Continuations are built solely from the cursor; the server derives the
      rest of the query from it
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Query(BaseModel):
    """Filter and pagination parameters for a list or sum request."""

    filter: str = ""
    filter_params: tuple[Any, ...] = ()
    group_by: tuple[str, ...] = ()
    page_size: int | None = Field(None, gt=0)
    cursor: str | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_continuation(self) -> Query:
        """A cursor-bearing query must not carry fresh-query fields."""
        if self.cursor is None:
            return self
        if not self.cursor:
            raise ValueError("cursor must be a non-empty string")
        if self.filter or self.filter_params or self.group_by or self.page_size is not None:
            raise ValueError(
                "A continuation query carries only a cursor; "
                "filter, filter_params, group_by and page_size must be empty"
            )
        return self

    @classmethod
    def continuation(cls, cursor: str) -> Query:
        """Create a continuation query from a server-issued cursor."""
        return cls(cursor=cursor)

    @property
    def is_continuation(self) -> bool:
        return self.cursor is not None

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON request body, omitting unset fields."""
        if self.cursor is not None:
            return {"cursor": self.cursor}
        body: dict[str, Any] = {}
        if self.filter:
            body["filter"] = self.filter
        if self.filter_params:
            body["filter_params"] = list(self.filter_params)
        if self.group_by:
            body["group_by"] = list(self.group_by)
        if self.page_size is not None:
            body["page_size"] = self.page_size
        return body


class QueryBuilder:
    """Fluent builder for fresh queries.

    Example:
        >>> query = (QueryBuilder()
        ...     .filter("tags.type=$1")
        ...     .add_filter_param("vip")
        ...     .page_size(2)
        ...     .build())
    """

    def __init__(self) -> None:
        self._filter = ""
        self._filter_params: list[Any] = []
        self._group_by: list[str] = []
        self._page_size: int | None = None

    def filter(self, filter: str) -> Self:
        """Set the filter expression (placeholders are ``$1``, ``$2``, ...)."""
        self._filter = filter
        return self

    def add_filter_param(self, value: Any) -> Self:
        """Append a value for the next filter placeholder."""
        self._filter_params.append(value)
        return self

    def filter_params(self, values: Iterable[Any]) -> Self:
        """Replace all filter parameter values."""
        self._filter_params = list(values)
        return self

    def page_size(self, size: int) -> Self:
        """Set the maximum number of items per page."""
        if size <= 0:
            raise ValueError("page_size must be positive")
        self._page_size = size
        return self

    def build(self) -> Query:
        """Freeze the accumulated settings into a new Query."""
        return Query(
            filter=self._filter,
            filter_params=tuple(self._filter_params),
            group_by=tuple(self._group_by),
            page_size=self._page_size,
        )
