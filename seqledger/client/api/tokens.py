"""Token operations: list, sum."""

from __future__ import annotations

from ..models.token import TokenGroup, TokenSum
from .builders import ListBuilder, SumBuilder

LIST_TOKENS = "list-tokens"
SUM_TOKENS = "sum-tokens"


def list_tokens() -> ListBuilder[TokenGroup]:
    """Start a list-tokens query."""
    return ListBuilder(LIST_TOKENS, TokenGroup)


def sum_tokens() -> SumBuilder[TokenSum]:
    """Start a sum-tokens query; add fields with ``group_by``."""
    return SumBuilder(SUM_TOKENS, TokenSum)
