"""Explicit success/failure values returned by the transport.

Architecture:
    The transport never raises for service failures. It returns an Outcome,
    which is either a Success carrying the decoded value or a Failure
    carrying a LedgerError. Retry loops and callers compose over these
    values; ``unwrap()`` converts back to the raising style at the API edge.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from .enums import ErrorKind
from .exceptions import LedgerError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful call.

    Attributes:
        value: Decoded response of the declared result type
        attempts: Number of HTTP attempts it took (1 when no retry happened)
    """

    value: T
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """Failed call.

    Attributes:
        error: Structured error describing the failure
        attempts: Number of HTTP attempts made before giving up
    """

    error: LedgerError
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self) -> NoReturn:
        raise self.error


Outcome = Union[Success[T], Failure]
