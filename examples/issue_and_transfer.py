#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import uuid

from seqledger.client import (
    AccountBuilder,
    Client,
    FlavorBuilder,
    KeyBuilder,
    LedgerError,
    TransactionBuilder,
    tokens,
)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Issue tokens and transfer some between two accounts")
    p.add_argument("amount", nargs="?", type=int, default=100)
    p.add_argument("transfer", nargs="?", type=int, default=25)
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    run = uuid.uuid4().hex[:8]

    async with Client.from_env() as client:
        key = await KeyBuilder().id(f"key-{run}").idempotency_key(f"key-{run}").create(client)
        usd = await FlavorBuilder().id(f"usd-{run}").add_key_id(key.id).create(client)
        alice = await AccountBuilder().id(f"alice-{run}").add_key_id(key.id).create(client)
        bob = await AccountBuilder().id(f"bob-{run}").add_key_id(key.id).create(client)

        try:
            tx = await (
                TransactionBuilder()
                .issue(flavor_id=usd.id, amount=args.amount, destination_account_id=alice.id)
                .transfer(
                    flavor_id=usd.id,
                    amount=args.transfer,
                    source_account_id=alice.id,
                    destination_account_id=bob.id,
                )
                .add_transaction_tag("run", run)
                .idempotency_key(f"tx-{run}")
                .transact(client)
            )
        except LedgerError as e:
            print(f"transaction failed [{e.kind.value}]: {e}")
            return

        print(f"Transaction {tx.id} (seq {tx.sequence_number}) with {len(tx.actions)} actions")
        balances = (
            tokens.sum_tokens()
            .filter("flavor_id=$1")
            .add_filter_param(usd.id)
            .group_by("account_id")
            .get_iterable(client)
        )
        async for row in balances:
            print(f"{row.account_id:20} {row.amount:>10}")


if __name__ == "__main__":
    asyncio.run(main())
