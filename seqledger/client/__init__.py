"""seqledger client - async client library for a remote ledger service."""

from .api import (
    AccountBuilder,
    Client,
    CreateBuilder,
    FlavorBuilder,
    KeyBuilder,
    ListBuilder,
    SumBuilder,
    TagUpdateBuilder,
    TransactionBuilder,
    accounts,
    actions,
    flavors,
    keys,
    tokens,
    transactions,
)
from .core import (
    APIError,
    ClientConfig,
    ConnectivityError,
    DecodeError,
    ErrorKind,
    Failure,
    LedgerError,
    Outcome,
    Query,
    QueryBuilder,
    RequestRejectedError,
    RetryPolicy,
    Success,
)
from .models import (
    Account,
    Action,
    ActionSum,
    Flavor,
    Key,
    SuccessMessage,
    TokenGroup,
    TokenSum,
    Transaction,
)
from .runtime.pagination import ItemSequence, Page

__version__ = "0.1.0"

__all__ = [
    # Client
    "Client",
    "ClientConfig",
    "RetryPolicy",
    # Queries and pagination
    "Query",
    "QueryBuilder",
    "Page",
    "ItemSequence",
    # Builders
    "ListBuilder",
    "SumBuilder",
    "CreateBuilder",
    "TagUpdateBuilder",
    "AccountBuilder",
    "FlavorBuilder",
    "KeyBuilder",
    "TransactionBuilder",
    # Resource operations
    "accounts",
    "actions",
    "flavors",
    "keys",
    "tokens",
    "transactions",
    # Models
    "Account",
    "Action",
    "ActionSum",
    "Flavor",
    "Key",
    "SuccessMessage",
    "TokenGroup",
    "TokenSum",
    "Transaction",
    # Outcomes
    "Outcome",
    "Success",
    "Failure",
    # Exceptions
    "ErrorKind",
    "LedgerError",
    "ConnectivityError",
    "RequestRejectedError",
    "APIError",
    "DecodeError",
]
