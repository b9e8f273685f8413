"""Single page of results returned by a list or sum operation."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One server-returned batch of items plus continuation metadata.

    Attributes:
        items: Items in server order
        cursor: Opaque token resuming the query after this page. Kept even on
            the last page, where it names the query's terminal state.
        last_page: Whether the server has no further pages for this query
    """

    items: tuple[T, ...] = ()
    cursor: str = ""
    last_page: bool = False

    model_config = ConfigDict(frozen=True)
