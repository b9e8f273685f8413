"""Structured logging for paginated fetches.

This module provides telemetry hooks for ItemSequence page fetches,
emitting structured logs for observability.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    operation: str,
    page_index: int,
    items: int,
    last_page: bool,
    continuation: bool,
    latency_ms: float | None = None,
) -> None:
    """Log a fetched page.

    Args:
        operation: Operation name (e.g. "list-accounts")
        page_index: Zero-based index of the page within the sequence
        items: Number of items on the page
        last_page: Last-page flag reported by the server
        continuation: Whether the page was fetched with a cursor
        latency_ms: Fetch latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "operation": operation,
            "page_index": page_index,
            "items": items,
            "last_page": last_page,
            "continuation": continuation,
            "latency_ms": latency_ms,
        },
    )


def log_sequence_exhausted(*, operation: str, pages_fetched: int, items_yielded: int) -> None:
    """Log the end of an item sequence."""
    logger.debug(
        "sequence_exhausted",
        extra={
            "operation": operation,
            "pages_fetched": pages_fetched,
            "items_yielded": items_yielded,
        },
    )


def log_page_error(
    *,
    operation: str,
    page_index: int,
    error_kind: str,
    error_message: str,
) -> None:
    """Log a page fetch that failed and left the sequence unusable.

    Args:
        operation: Operation name
        page_index: Zero-based index of the page that failed
        error_kind: ErrorKind value of the failure
        error_message: Error message
    """
    logger.error(
        "page_error",
        extra={
            "operation": operation,
            "page_index": page_index,
            "error_kind": error_kind,
            "error_message": error_message,
        },
    )
