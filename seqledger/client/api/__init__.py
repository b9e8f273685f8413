"""High-level API: client facade, generic builders and resource operations."""

from . import accounts, actions, flavors, keys, tokens, transactions
from .accounts import AccountBuilder
from .builders import CreateBuilder, ListBuilder, SumBuilder, TagUpdateBuilder
from .client import Client
from .flavors import FlavorBuilder
from .keys import KeyBuilder
from .transactions import TransactionBuilder

__all__ = [
    "Client",
    "ListBuilder",
    "SumBuilder",
    "CreateBuilder",
    "TagUpdateBuilder",
    "AccountBuilder",
    "FlavorBuilder",
    "KeyBuilder",
    "TransactionBuilder",
    "accounts",
    "actions",
    "flavors",
    "keys",
    "tokens",
    "transactions",
]
