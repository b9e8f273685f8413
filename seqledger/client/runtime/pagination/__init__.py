"""Cursor pagination layer.

This module exposes multi-page result sets as lazily fetched sequences.

Architecture:
    The pagination layer consists of:
    - page.py: Generic Page[T] model (items, cursor, last_page)
    - sequence.py: ItemSequence[T] async iterator that fetches on demand
    - telemetry.py: Structured logging for page fetches
"""

from __future__ import annotations

from .page import Page
from .sequence import Invoker, ItemSequence, fetch_page

__all__ = [
    "Invoker",
    "ItemSequence",
    "Page",
    "fetch_page",
]
