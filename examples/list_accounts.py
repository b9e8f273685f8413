#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from seqledger.client import Client, accounts


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List ledger accounts page by page")
    p.add_argument("--filter", default="", help='e.g. "tags.type=$1"')
    p.add_argument("--param", action="append", default=[], help="filter parameter (repeatable)")
    p.add_argument("--page-size", type=int, default=10)
    p.add_argument("--cursor", default=None, help="resume from a saved cursor")
    return p.parse_args()


async def main() -> None:
    args = parse_args()

    async with Client.from_env() as client:
        builder = (
            accounts.list_accounts()
            .filter(args.filter)
            .filter_params(args.param)
            .page_size(args.page_size)
        )
        page = await builder.get_page(client, cursor=args.cursor)
        print("=" * 65)
        print(f"{'Account':30} | {'Quorum':>6} | Tags")
        print("-" * 65)
        for account in page.items:
            print(f"{account.id:30} | {account.quorum:>6} | {account.tags}")
        print("=" * 65)
        print(f"last_page={page.last_page} cursor={page.cursor}")


if __name__ == "__main__":
    asyncio.run(main())
