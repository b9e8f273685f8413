"""Shared fixtures for integration tests."""

import os

import pytest
import pytest_asyncio

from seqledger.client import Client

# Skip all integration tests unless RUN_SEQLEDGER_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_SEQLEDGER_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_SEQLEDGER_NETWORK_TESTS=1 to run",
)


@pytest_asyncio.fixture
async def live_client():
    """Client configured from SEQLEDGER_* variables against a real ledger."""
    async with Client.from_env() as client:
        yield client
