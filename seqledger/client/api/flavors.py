"""Flavor operations: create, list, update tags."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Self

from ..models.flavor import Flavor, NewFlavor
from .builders import CreateBuilder, ListBuilder, TagUpdateBuilder

LIST_FLAVORS = "list-flavors"
CREATE_FLAVOR = "create-flavor"
UPDATE_FLAVOR_TAGS = "update-flavor-tags"


class FlavorBuilder(CreateBuilder[Flavor]):
    """Builder for defining a flavor."""

    operation = CREATE_FLAVOR
    result_type = Flavor

    def __init__(self) -> None:
        super().__init__()
        self._id: str | None = None
        self._quorum: int | None = None
        self._key_ids: list[str] = []
        self._tags: dict[str, Any] | None = None

    def id(self, id: str) -> Self:
        self._id = id
        return self

    def quorum(self, quorum: int) -> Self:
        """Number of keys required to sign issuances. Defaults to the number of keys."""
        self._quorum = quorum
        return self

    def add_key_id(self, key_id: str) -> Self:
        self._key_ids.append(key_id)
        return self

    def key_ids(self, key_ids: Iterable[str]) -> Self:
        self._key_ids = list(key_ids)
        return self

    def add_tag(self, key: str, value: Any) -> Self:
        if self._tags is None:
            self._tags = {}
        self._tags[key] = value
        return self

    def tags(self, tags: Mapping[str, Any]) -> Self:
        self._tags = dict(tags)
        return self

    def build(self) -> NewFlavor:
        return NewFlavor(
            id=self._id,
            quorum=self._quorum,
            key_ids=list(self._key_ids),
            tags=dict(self._tags) if self._tags is not None else None,
        )


def list_flavors() -> ListBuilder[Flavor]:
    """Start a list-flavors query."""
    return ListBuilder(LIST_FLAVORS, Flavor)


def update_flavor_tags(flavor_id: str | None = None) -> TagUpdateBuilder:
    """Start an update-flavor-tags request."""
    builder = TagUpdateBuilder(UPDATE_FLAVOR_TAGS)
    if flavor_id is not None:
        builder.for_id(flavor_id)
    return builder
