"""REST transport: one logical ledger operation per invoke().

Architecture:
    RESTTransport turns (operation, payload, result type) into a JSON POST
    against ``/{ledger}/{operation}``, decodes the declared result type with
    pydantic, and returns an Outcome. Service failures never escape as
    exceptions from invoke(); they come back as Failure values so the retry
    loop and callers can branch on the error kind.

Design Decisions:
    - Retry eligibility is explicit: idempotent operations (page fetches,
      tag updates) or calls carrying an idempotency key
    - The idempotency key is sent unchanged on every attempt so the service
      can deduplicate re-executions
    - Decode failures are local contract mismatches and never retried
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable, Mapping
from time import perf_counter
from typing import TYPE_CHECKING, Any, TypeVar

import aiohttp
from pydantic import BaseModel, TypeAdapter, ValidationError

from ...core.exceptions import ConnectivityError, DecodeError
from ...core.outcome import Failure, Outcome, Success
from ...core.query import Query
from .http_client import HTTPClient, HTTPResponse, ResponseHook
from .retry import RetryPolicy, classify_http_error, parse_retry_after

if TYPE_CHECKING:
    from ...core.config import ClientConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

REQUEST_ID_HEADER = "Request-Id"
IDEMPOTENCY_KEY_HEADER = "Idempotency-Key"
CREDENTIAL_HEADER = "Credential"


def serialize_payload(payload: Any) -> Any:
    """Convert a request payload into a JSON-compatible body."""
    if payload is None:
        return {}
    if isinstance(payload, Query):
        return payload.to_wire()
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_none=True)
    if isinstance(payload, Mapping):
        return dict(payload)
    raise TypeError(f"Unsupported payload type: {type(payload).__name__}")


class RESTTransport:
    """Retrying JSON-over-HTTP transport bound to one ledger."""

    def __init__(
        self,
        base_url: str,
        ledger_name: str,
        *,
        credential: str | None = None,
        timeout: float = 30.0,
        retry: RetryPolicy | None = None,
        user_agent: str | None = None,
        http: HTTPClient | None = None,
        sleep: Callable[[float], Any] = asyncio.sleep,
    ) -> None:
        headers = {"Accept": "application/json"}
        if user_agent:
            headers["User-Agent"] = user_agent
        if credential:
            headers[CREDENTIAL_HEADER] = credential
        self._http = http or HTTPClient(base_url=base_url, timeout=timeout, headers=headers)
        self.ledger_name = ledger_name
        self.retry = retry or RetryPolicy()
        self._sleep = sleep
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    @classmethod
    def from_config(cls, config: ClientConfig) -> RESTTransport:
        return cls(
            config.base_url,
            config.ledger_name,
            credential=config.credential,
            timeout=config.timeout,
            retry=config.retry,
            user_agent=config.user_agent,
        )

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a hook called with every raw response (see HTTPClient)."""
        self._http.add_response_hook(hook)

    def _adapter(self, result_type: Any) -> TypeAdapter[Any]:
        adapter = self._adapters.get(result_type)
        if adapter is None:
            adapter = TypeAdapter(result_type)
            self._adapters[result_type] = adapter
        return adapter

    async def invoke(
        self,
        operation: str,
        payload: Any,
        result_type: type[T],
        *,
        idempotent: bool = False,
        idempotency_key: str | None = None,
    ) -> Outcome[T]:
        """Execute one operation, retrying when the policy allows.

        Args:
            operation: Operation name, e.g. "list-accounts"
            payload: Query, pydantic model, mapping or None
            result_type: Type to decode a successful response into
            idempotent: Whether re-executing the operation is always safe
            idempotency_key: Caller-supplied key making a non-idempotent
                operation safe to re-send

        Returns:
            Success with the decoded value, or Failure with a LedgerError
        """
        body = serialize_payload(payload)
        headers = {"Content-Type": "application/json"}
        if idempotency_key:
            headers[IDEMPOTENCY_KEY_HEADER] = idempotency_key
        retry_allowed = idempotent or idempotency_key is not None
        path = f"/{self.ledger_name}/{operation}"

        attempt = 0
        while True:
            attempt += 1
            started = perf_counter()
            outcome, retry_after = await self._attempt(path, body, headers, result_type, attempt)
            if outcome.ok:
                return outcome

            error = outcome.error
            if not self.retry.should_retry(error, attempt, retry_allowed=retry_allowed):
                if isinstance(error, ConnectivityError) and retry_allowed:
                    error = ConnectivityError(
                        f"service unavailable after {attempt} attempts: {error.message}",
                        request_id=error.request_id,
                    )
                logger.error(
                    "request_failed",
                    extra={
                        "operation": operation,
                        "attempts": attempt,
                        "error_kind": error.kind.value,
                        "error_code": error.code,
                        "request_id": error.request_id,
                    },
                )
                return Failure(error, attempts=attempt)

            delay = self.retry.backoff(attempt, retry_after)
            logger.warning(
                "request_retry",
                extra={
                    "operation": operation,
                    "attempt": attempt,
                    "max_attempts": self.retry.max_attempts,
                    "error_kind": error.kind.value,
                    "error_code": error.code,
                    "delay_s": delay,
                    "latency_ms": (perf_counter() - started) * 1000.0,
                },
            )
            await self._sleep(delay)

    async def _attempt(
        self,
        path: str,
        body: Any,
        headers: dict[str, str],
        result_type: Any,
        attempt: int,
    ) -> tuple[Outcome[Any], float | None]:
        try:
            response = await self._http.post(path, json=body, headers=headers)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            message = str(e) or type(e).__name__
            return Failure(ConnectivityError(message), attempts=attempt), None

        request_id = response.headers.get(REQUEST_ID_HEADER)
        if not response.ok:
            error = classify_http_error(
                response.status, _error_body(response), request_id=request_id
            )
            return Failure(error, attempts=attempt), parse_retry_after(
                response.headers.get("Retry-After")
            )

        try:
            data = json.loads(response.body.decode("utf-8")) if response.body else {}
            value = self._adapter(result_type).validate_python(data)
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            error = DecodeError(
                f"could not decode {getattr(result_type, '__name__', result_type)} response",
                detail=str(e).splitlines()[0],
                request_id=request_id,
                status_code=response.status,
            )
            return Failure(error, attempts=attempt), None
        return Success(value, attempts=attempt), None

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> RESTTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _error_body(response: HTTPResponse) -> dict[str, Any]:
    try:
        body = json.loads(response.body.decode("utf-8")) if response.body else {}
    except (UnicodeDecodeError, json.JSONDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


__all__ = ["RESTTransport", "serialize_payload"]
