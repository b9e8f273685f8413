"""Transaction operations: transact, list."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Self

from ..models.transaction import (
    IssueAction,
    NewTransaction,
    RetireAction,
    Transaction,
    TransferAction,
)
from ..runtime.pagination import Invoker
from .builders import CreateBuilder, ListBuilder

LIST_TRANSACTIONS = "list-transactions"
TRANSACT = "transact"


class TransactionBuilder(CreateBuilder[Transaction]):
    """Builder for an atomic multi-action transaction.

    Example:
        >>> tx = await (TransactionBuilder()
        ...     .issue(flavor_id="usd", amount=100, destination_account_id="alice")
        ...     .transfer(
        ...         flavor_id="usd",
        ...         amount=25,
        ...         source_account_id="alice",
        ...         destination_account_id="bob",
        ...     )
        ...     .transaction_tags({"memo": "rent"})
        ...     .transact(client))
    """

    operation = TRANSACT
    result_type = Transaction

    def __init__(self) -> None:
        super().__init__()
        self._actions: list[IssueAction | TransferAction | RetireAction] = []
        self._transaction_tags: dict[str, Any] | None = None

    def issue(
        self,
        *,
        flavor_id: str,
        amount: int,
        destination_account_id: str,
        token_tags: Mapping[str, Any] | None = None,
        action_tags: Mapping[str, Any] | None = None,
    ) -> Self:
        """Add an issuance of new tokens."""
        self._actions.append(
            IssueAction(
                flavor_id=flavor_id,
                amount=amount,
                destination_account_id=destination_account_id,
                token_tags=dict(token_tags) if token_tags is not None else None,
                action_tags=dict(action_tags) if action_tags is not None else None,
            )
        )
        return self

    def transfer(
        self,
        *,
        flavor_id: str,
        amount: int,
        source_account_id: str,
        destination_account_id: str,
        filter: str | None = None,
        filter_params: Iterable[Any] | None = None,
        token_tags: Mapping[str, Any] | None = None,
        action_tags: Mapping[str, Any] | None = None,
    ) -> Self:
        """Add a transfer between accounts.

        ``filter``/``filter_params`` select which of the source's tokens are
        spent.
        """
        self._actions.append(
            TransferAction(
                flavor_id=flavor_id,
                amount=amount,
                source_account_id=source_account_id,
                destination_account_id=destination_account_id,
                filter=filter,
                filter_params=list(filter_params) if filter_params is not None else None,
                token_tags=dict(token_tags) if token_tags is not None else None,
                action_tags=dict(action_tags) if action_tags is not None else None,
            )
        )
        return self

    def retire(
        self,
        *,
        flavor_id: str,
        amount: int,
        source_account_id: str,
        filter: str | None = None,
        filter_params: Iterable[Any] | None = None,
        action_tags: Mapping[str, Any] | None = None,
    ) -> Self:
        """Add a retirement of tokens."""
        self._actions.append(
            RetireAction(
                flavor_id=flavor_id,
                amount=amount,
                source_account_id=source_account_id,
                filter=filter,
                filter_params=list(filter_params) if filter_params is not None else None,
                action_tags=dict(action_tags) if action_tags is not None else None,
            )
        )
        return self

    def transaction_tags(self, tags: Mapping[str, Any]) -> Self:
        self._transaction_tags = dict(tags)
        return self

    def add_transaction_tag(self, key: str, value: Any) -> Self:
        if self._transaction_tags is None:
            self._transaction_tags = {}
        self._transaction_tags[key] = value
        return self

    def build(self) -> NewTransaction:
        if not self._actions:
            raise ValueError("a transaction needs at least one action")
        return NewTransaction(
            actions=list(self._actions),
            transaction_tags=(
                dict(self._transaction_tags) if self._transaction_tags is not None else None
            ),
        )

    async def transact(self, client: Invoker) -> Transaction:
        """Submit the transaction.

        Raises:
            LedgerError: If the request fails
        """
        return await self._submit(client)


def list_transactions() -> ListBuilder[Transaction]:
    """Start a list-transactions query."""
    return ListBuilder(LIST_TRANSACTIONS, Transaction)
