"""Client facade for a single ledger.

The Client wraps a RESTTransport and is the object passed explicitly to
every builder method (get_page, get_iterable, create, update, transact).

Architecture:
    This module implements the Facade pattern over the transport:
    - Configuration (ClientConfig) resolved once at construction
    - invoke(): Outcome-returning call for callers composing on results
    - request(): value-returning call raising the carried LedgerError
    - Resource lifecycle via async context manager

Design Decisions:
    - Transport injection allows testing with mock transports
    - No module-level default client; ownership stays with the caller

See Also:
    - RESTTransport: The underlying retrying transport
    - ListBuilder / CreateBuilder: Request builders taking a Client
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from ..core.config import ClientConfig
from ..core.outcome import Outcome
from ..runtime.rest import RESTTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Client:
    """Connection to one ledger.

    Example:
        >>> async with Client(ClientConfig(ledger_name="main", credential="...")) as client:
        ...     page = await accounts.list_accounts().page_size(10).get_page(client)
        ...     async for tx in transactions.list_transactions().get_iterable(client):
        ...         print(tx.id)
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: RESTTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Connection settings
            transport: Optional transport (creates one from config if not provided)
        """
        self.config = config
        self._owns_transport = transport is None
        self._transport = transport or RESTTransport.from_config(config)
        self._closed = False

    @classmethod
    def from_env(cls) -> Client:
        """Create a client configured from SEQLEDGER_* environment variables."""
        return cls(ClientConfig.from_env())

    @property
    def transport(self) -> RESTTransport:
        return self._transport

    async def invoke(
        self,
        operation: str,
        payload: Any,
        result_type: type[T],
        *,
        idempotent: bool = False,
        idempotency_key: str | None = None,
    ) -> Outcome[T]:
        """Execute an operation and return its Outcome without raising.

        Args:
            operation: Operation name, e.g. "create-account"
            payload: Query, pydantic model, mapping or None
            result_type: Type the successful response decodes into
            idempotent: Whether the operation is safe to re-execute
            idempotency_key: Key making a non-idempotent operation retryable
        """
        if self._closed:
            raise RuntimeError("Client is closed")
        return await self._transport.invoke(
            operation,
            payload,
            result_type,
            idempotent=idempotent,
            idempotency_key=idempotency_key,
        )

    async def request(
        self,
        operation: str,
        payload: Any,
        result_type: type[T],
        *,
        idempotent: bool = False,
        idempotency_key: str | None = None,
    ) -> T:
        """Execute an operation and return the decoded value.

        Raises:
            LedgerError: If the operation fails
        """
        outcome = await self.invoke(
            operation,
            payload,
            result_type,
            idempotent=idempotent,
            idempotency_key=idempotency_key,
        )
        return outcome.unwrap()

    async def close(self) -> None:
        """Close the underlying transport if this client created it."""
        if self._closed:
            return
        self._closed = True
        if self._owns_transport:
            await self._transport.close()
        logger.debug("client_closed", extra={"ledger": self.config.ledger_name})

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
