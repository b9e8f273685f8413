"""Account operations: create, list, update tags."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Self

from ..models.account import Account, NewAccount
from .builders import CreateBuilder, ListBuilder, TagUpdateBuilder

LIST_ACCOUNTS = "list-accounts"
CREATE_ACCOUNT = "create-account"
UPDATE_ACCOUNT_TAGS = "update-account-tags"


class AccountBuilder(CreateBuilder[Account]):
    """Builder for creating an account.

    Example:
        >>> account = await (AccountBuilder()
        ...     .id("alice")
        ...     .add_key_id("key-1")
        ...     .quorum(1)
        ...     .add_tag("type", "vip")
        ...     .create(client))
    """

    operation = CREATE_ACCOUNT
    result_type = Account

    def __init__(self) -> None:
        super().__init__()
        self._id: str | None = None
        self._quorum: int | None = None
        self._key_ids: list[str] = []
        self._tags: dict[str, Any] | None = None

    def id(self, id: str) -> Self:
        """Set the account id (generated by the service if omitted)."""
        self._id = id
        return self

    def quorum(self, quorum: int) -> Self:
        """Number of keys required to sign spends. Defaults to the number of keys."""
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

    def build(self) -> NewAccount:
        return NewAccount(
            id=self._id,
            quorum=self._quorum,
            key_ids=list(self._key_ids),
            tags=dict(self._tags) if self._tags is not None else None,
        )


def list_accounts() -> ListBuilder[Account]:
    """Start a list-accounts query."""
    return ListBuilder(LIST_ACCOUNTS, Account)


def update_account_tags(account_id: str | None = None) -> TagUpdateBuilder:
    """Start an update-account-tags request."""
    builder = TagUpdateBuilder(UPDATE_ACCOUNT_TAGS)
    if account_id is not None:
        builder.for_id(account_id)
    return builder
