"""Action operations: list, sum, update tags."""

from __future__ import annotations

from ..models.action import Action, ActionSum
from .builders import ListBuilder, SumBuilder, TagUpdateBuilder

LIST_ACTIONS = "list-actions"
SUM_ACTIONS = "sum-actions"
UPDATE_ACTION_TAGS = "update-action-tags"


def list_actions() -> ListBuilder[Action]:
    """Start a list-actions query."""
    return ListBuilder(LIST_ACTIONS, Action)


def sum_actions() -> SumBuilder[ActionSum]:
    """Start a sum-actions query; add fields with ``group_by``."""
    return SumBuilder(SUM_ACTIONS, ActionSum)


def update_action_tags(action_id: str | None = None) -> TagUpdateBuilder:
    """Start an update-action-tags request."""
    builder = TagUpdateBuilder(UPDATE_ACTION_TAGS)
    if action_id is not None:
        builder.for_id(action_id)
    return builder
