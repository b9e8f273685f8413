"""Data models for ledger resources.

Architecture:
    This module exports the Pydantic v2 models used throughout the library.
    Response models are immutable (frozen=True); request payload models are
    frozen as well so a payload handed to the transport cannot change while
    it is being retried.

Model Categories:
    - Resources: Account, Flavor, Key, Transaction, Action, TokenGroup
    - Aggregates: ActionSum, TokenSum
    - Payloads: NewAccount, NewFlavor, NewKey, NewTransaction, TagUpdate
    - Acknowledgements: SuccessMessage
"""

from .account import Account, NewAccount
from .action import Action, ActionSnapshot, ActionSum
from .common import SuccessMessage, TagUpdate
from .flavor import Flavor, NewFlavor
from .key import Key, NewKey
from .token import TokenGroup, TokenSum
from .transaction import (
    IssueAction,
    NewTransaction,
    RetireAction,
    Transaction,
    TransferAction,
)

__all__ = [
    "Account",
    "Action",
    "ActionSnapshot",
    "ActionSum",
    "Flavor",
    "IssueAction",
    "Key",
    "NewAccount",
    "NewFlavor",
    "NewKey",
    "NewTransaction",
    "RetireAction",
    "SuccessMessage",
    "TagUpdate",
    "TokenGroup",
    "TokenSum",
    "Transaction",
    "TransferAction",
]
