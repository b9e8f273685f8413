"""Custom exception hierarchy."""

from __future__ import annotations

from typing import Any

from .enums import ErrorKind


class LedgerError(Exception):
    """Base exception for all client errors.

    Carries the structured failure reported by the service (or synthesized
    locally) so callers can branch on ``kind``/``code`` and still print a
    useful diagnostic.
    """

    kind: ErrorKind = ErrorKind.APPLICATION

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: str | None = None,
        request_id: str | None = None,
        retryable: bool = False,
        status_code: int | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.detail = detail
        self.request_id = request_id
        self.retryable = retryable
        self.status_code = status_code
        self.data = data or {}

    def __str__(self) -> str:
        text = f"{self.code}: {self.message}" if self.code else self.message
        if self.detail:
            text = f"{text} ({self.detail})"
        if self.request_id:
            text = f"{text} [request_id={self.request_id}]"
        return text


class ConnectivityError(LedgerError):
    """Network-level failure talking to the service."""

    kind = ErrorKind.CONNECTIVITY

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("retryable", True)
        kwargs.setdefault("code", "CONNECTIVITY")
        super().__init__(message, **kwargs)


class RequestRejectedError(LedgerError):
    """Service rejected the request shape or payload. Never retried."""

    kind = ErrorKind.MALFORMED_REQUEST

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs["retryable"] = False
        super().__init__(message, **kwargs)


class APIError(LedgerError):
    """Application error reported by the service (e.g. quorum violation)."""

    kind = ErrorKind.APPLICATION


class DecodeError(LedgerError):
    """Response could not be decoded into the expected type.

    Indicates a contract mismatch between client and service rather than a
    business outcome, so it is never retried.
    """

    kind = ErrorKind.DECODE

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs["retryable"] = False
        kwargs.setdefault("code", "DECODE")
        super().__init__(message, **kwargs)
