"""Key operations: create, list."""

from __future__ import annotations

from typing import Self

from ..models.key import Key, NewKey
from .builders import CreateBuilder, ListBuilder

LIST_KEYS = "list-keys"
CREATE_KEY = "create-key"


class KeyBuilder(CreateBuilder[Key]):
    """Builder for creating a key."""

    operation = CREATE_KEY
    result_type = Key

    def __init__(self) -> None:
        super().__init__()
        self._id: str | None = None

    def id(self, id: str) -> Self:
        self._id = id
        return self

    def build(self) -> NewKey:
        return NewKey(id=self._id)


def list_keys() -> ListBuilder[Key]:
    """Start a list-keys query."""
    return ListBuilder(LIST_KEYS, Key)
