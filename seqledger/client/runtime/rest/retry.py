"""Failure classification for REST calls."""

from __future__ import annotations

from typing import Any

from ...core.config import RetryPolicy
from ...core.exceptions import APIError, LedgerError, RequestRejectedError

# Statuses signalling temporary overload; retryable unless the body says otherwise.
OVERLOAD_STATUSES = frozenset({408, 429, 502, 503, 504})

# 4xx statuses that are not caller mistakes.
_NOT_REJECTED = frozenset({408, 409, 429})


def classify_http_error(
    status: int,
    body: dict[str, Any],
    *,
    request_id: str | None = None,
) -> LedgerError:
    """Build the error for a non-2xx response.

    Args:
        status: HTTP status code
        body: Decoded error body ({} when the body was not JSON)
        request_id: Request id from the response headers

    Returns:
        RequestRejectedError for caller mistakes, APIError otherwise
    """
    code = body.get("code") or f"HTTP{status}"
    message = body.get("message") or f"unexpected status code {status}"
    detail = body.get("detail")
    data = body.get("data") if isinstance(body.get("data"), dict) else None
    request_id = request_id or body.get("request_id")

    if 400 <= status < 500 and status not in _NOT_REJECTED:
        return RequestRejectedError(
            message,
            code=code,
            detail=detail,
            request_id=request_id,
            status_code=status,
            data=data,
        )

    retryable = status in OVERLOAD_STATUSES
    # The server's own classification wins over the status-based default
    flag = body.get("retryable", body.get("retriable"))
    if isinstance(flag, bool):
        retryable = flag
    return APIError(
        message,
        code=code,
        detail=detail,
        request_id=request_id,
        retryable=retryable,
        status_code=status,
        data=data,
    )


def parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given in seconds."""
    if value is None:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if seconds >= 0 else None


__all__ = ["OVERLOAD_STATUSES", "RetryPolicy", "classify_http_error", "parse_retry_after"]
