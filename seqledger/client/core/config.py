"""Client configuration.

This module centralizes the service URL, credentials and timeouts so the
Client and transport can stay small and focused.
"""

from __future__ import annotations

import os
import random
from collections.abc import Mapping
from dataclasses import dataclass, field

from .exceptions import LedgerError

DEFAULT_BASE_URL = "https://api.seq.com"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "seqledger-client/0.1.0"

ENV_LEDGER = "SEQLEDGER_LEDGER"
ENV_CREDENTIAL = "SEQLEDGER_CREDENTIAL"
ENV_URL = "SEQLEDGER_URL"
ENV_TIMEOUT = "SEQLEDGER_TIMEOUT"
ENV_MAX_ATTEMPTS = "SEQLEDGER_MAX_ATTEMPTS"


@dataclass(frozen=True)
class RetryPolicy:
    """Retry settings for retry-eligible operations.

    Attributes:
        max_attempts: Total attempts including the first one
        base_delay: Delay after the first failed attempt, in seconds
        max_delay: Cap for any single delay, in seconds
        jitter: Relative jitter applied to each delay
    """

    max_attempts: int = 4
    base_delay: float = 0.25
    max_delay: float = 15.0
    jitter: float = 0.2  # +/-20% jitter to avoid thundering herds

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be non-negative")
        if not 0 <= self.jitter < 1:
            raise ValueError("jitter must be in [0, 1)")

    def backoff(self, attempt: int, retry_after: float | None = None) -> float:
        """Exponential backoff with jitter, capped to max_delay.

        Args:
            attempt: One-based number of the attempt that just failed
            retry_after: Server-requested delay in seconds, if any
        """
        delay = min(self.base_delay * (2 ** (attempt - 1)), self.max_delay)
        factor = random.uniform(1 - self.jitter, 1 + self.jitter)
        delay = min(delay * factor, self.max_delay)
        if retry_after is not None:
            delay = min(max(delay, retry_after), self.max_delay)
        return delay

    def should_retry(self, error: LedgerError, attempt: int, *, retry_allowed: bool) -> bool:
        """Decide whether a failed attempt is retried."""
        if not retry_allowed or attempt >= self.max_attempts:
            return False
        return error.retryable


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for one ledger.

    Attributes:
        ledger_name: Name of the ledger; every operation path is scoped by it
        credential: Opaque API credential forwarded in the Credential header
        base_url: Service root URL
        timeout: Total per-attempt timeout in seconds
        retry: Retry policy for retry-eligible operations
        user_agent: User-Agent header value
    """

    ledger_name: str
    credential: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if not self.ledger_name or not self.ledger_name.strip():
            raise ValueError("ledger_name must be a non-empty string")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Build a config from SEQLEDGER_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ (useful in tests)

        Returns:
            ClientConfig instance

        Raises:
            ValueError: If SEQLEDGER_LEDGER is missing or a value is malformed
        """
        env = os.environ if environ is None else environ
        ledger = env.get(ENV_LEDGER)
        if not ledger:
            raise ValueError(f"{ENV_LEDGER} must be set")

        retry = RetryPolicy()
        if env.get(ENV_MAX_ATTEMPTS):
            retry = RetryPolicy(max_attempts=int(env[ENV_MAX_ATTEMPTS]))

        return cls(
            ledger_name=ledger,
            credential=env.get(ENV_CREDENTIAL) or None,
            base_url=env.get(ENV_URL) or DEFAULT_BASE_URL,
            timeout=float(env[ENV_TIMEOUT]) if env.get(ENV_TIMEOUT) else DEFAULT_TIMEOUT,
            retry=retry,
        )
