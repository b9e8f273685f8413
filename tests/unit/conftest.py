"""Shared fixtures for unit tests: in-memory stand-ins for the ledger service."""

from __future__ import annotations

import re
from typing import Any

import pytest

from seqledger.client.core import Failure, LedgerError, Query, Success
from seqledger.client.models import Account

_TAG_FILTER = re.compile(r"^tags\.(\w+)=\$1$")


class FakeLedger:
    """Serves list operations from memory with opaque server-side cursors.

    Supports the ``tags.<key>=$1`` filter form and records every call.
    """

    def __init__(self, items: list[Any], default_page_size: int = 100) -> None:
        self.items = items
        self.default_page_size = default_page_size
        self.calls: list[tuple[str, Any, dict[str, Any]]] = []
        self._cursors: dict[str, tuple[list[Any], int, int]] = {}

    def _match(self, query: Query) -> list[Any]:
        if not query.filter:
            return list(self.items)
        m = _TAG_FILTER.match(query.filter)
        assert m, f"unsupported filter {query.filter!r}"
        key, value = m.group(1), query.filter_params[0]
        return [item for item in self.items if item.tags.get(key) == value]

    def _register(self, matched: list[Any], offset: int, size: int) -> str:
        token = f"cur-{len(self._cursors) + 1}"
        self._cursors[token] = (matched, offset, size)
        return token

    async def invoke(
        self,
        operation: str,
        payload: Any,
        result_type: Any,
        *,
        idempotent: bool = False,
        idempotency_key: str | None = None,
    ):
        self.calls.append(
            (operation, payload, {"idempotent": idempotent, "idempotency_key": idempotency_key})
        )
        if payload.cursor is not None:
            matched, offset, size = self._cursors[payload.cursor]
        else:
            matched, offset = self._match(payload), 0
            size = payload.page_size or self.default_page_size
        chunk = matched[offset : offset + size]
        end = offset + len(chunk)
        page = result_type(
            items=chunk,
            cursor=self._register(matched, end, size),
            last_page=end >= len(matched),
        )
        return Success(page)


class ScriptedInvoker:
    """Returns pre-built outcomes in order and records the queries sent."""

    def __init__(self, responses: list[Any]) -> None:
        self.responses = list(responses)
        self.queries: list[Query] = []
        self.kwargs: list[dict[str, Any]] = []

    async def invoke(
        self,
        operation: str,
        payload: Any,
        result_type: Any,
        *,
        idempotent: bool = False,
        idempotency_key: str | None = None,
    ):
        self.queries.append(payload)
        self.kwargs.append({"idempotent": idempotent, "idempotency_key": idempotency_key})
        if not self.responses:
            raise AssertionError(f"unexpected extra call to {operation}")
        response = self.responses.pop(0)
        if isinstance(response, LedgerError):
            return Failure(response)
        if isinstance(response, dict):
            return Success(result_type.model_validate(response))
        return Success(response)


def make_account(index: int, kind: str = "vip") -> Account:
    return Account(id=f"acct-{index}", key_ids=["key-1"], quorum=1, tags={"type": kind})


@pytest.fixture
def accounts_fixture() -> list[Account]:
    """Five vip accounts interleaved with three regular ones."""
    kinds = ["vip", "regular", "vip", "vip", "regular", "vip", "regular", "vip"]
    return [make_account(i, kind) for i, kind in enumerate(kinds)]


@pytest.fixture
def fake_ledger(accounts_fixture):
    return FakeLedger(accounts_fixture)


@pytest.fixture
def scripted():
    return ScriptedInvoker
