"""Core components."""

from .enums import ActionType, ErrorKind
from .exceptions import (
    APIError,
    ConnectivityError,
    DecodeError,
    LedgerError,
    RequestRejectedError,
)
from .outcome import Failure, Outcome, Success
from .query import Query, QueryBuilder
from .config import ClientConfig, RetryPolicy

__all__ = [
    "ActionType",
    "ErrorKind",
    "LedgerError",
    "ConnectivityError",
    "RequestRejectedError",
    "APIError",
    "DecodeError",
    "Outcome",
    "Success",
    "Failure",
    "Query",
    "QueryBuilder",
    "ClientConfig",
    "RetryPolicy",
]
