"""HTTP client helper."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)

ResponseHook = Callable[[Any], float | None] | Callable[[Any], Awaitable[float | None]]


@dataclass(frozen=True)
class HTTPResponse:
    """Raw response captured before the session context closes."""

    status: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []
        self._throttle_until: float | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a hook called with every response.

        A hook may return a delay in seconds; the next request waits at least
        that long.
        """
        self._response_hooks.append(hook)

    def set_throttle(self, seconds: float) -> None:
        """Delay subsequent requests by ``seconds`` (extends, never shortens)."""
        if seconds <= 0:
            return
        until = time.time() + seconds
        if self._throttle_until is None or until > self._throttle_until:
            self._throttle_until = until

    def _url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith(("http://", "https://")):
            return f"{self.base_url}{url}"
        return url

    async def _wait_for_throttle(self) -> None:
        if self._throttle_until is None:
            return
        remaining = self._throttle_until - time.time()
        if remaining > 0:
            await asyncio.sleep(remaining)
        self._throttle_until = None

    async def _run_hooks(self, response: Any) -> None:
        for hook in self._response_hooks:
            try:
                delay = hook(response)
                if inspect.isawaitable(delay):
                    delay = await delay
            except Exception as e:  # noqa: BLE001
                logger.warning(f"Response hook {hook!r} failed: {e}")
                continue
            if delay:
                self.set_throttle(float(delay))

    async def post(
        self,
        url: str,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> HTTPResponse:
        """POST request.

        Returns the raw response whatever its status; status classification
        is left to the caller. aiohttp errors propagate.
        """
        await self._wait_for_throttle()
        async with self.session.post(self._url(url), json=json, headers=headers) as response:
            await self._run_hooks(response)
            body = await response.read()
            return HTTPResponse(
                status=response.status,
                body=body,
                headers=response.headers.copy(),
            )

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
