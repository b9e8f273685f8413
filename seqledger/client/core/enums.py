"""Core enumerations shared by the transport and API layers.

Key Types:
    - ErrorKind: Classification of every failure surfaced by the client
    - ActionType: Kinds of ledger actions carried by a transaction
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure classification used by the transport retry policy.

    Architecture:
        String enum so the kind can be logged and serialized directly.
        Every LedgerError carries exactly one kind; callers branch on it
        instead of inspecting HTTP status codes.
    """

    CONNECTIVITY = "connectivity"  # network-level error, retried up to the cap
    MALFORMED_REQUEST = "malformed_request"  # server rejected the payload/shape
    APPLICATION = "application"  # business-rule or server-side failure
    DECODE = "decode"  # response did not match the expected shape


class ActionType(str, Enum):
    """Ledger action types."""

    ISSUE = "issue"
    TRANSFER = "transfer"
    RETIRE = "retire"
