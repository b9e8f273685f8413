"""Action data models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import ActionType


class ActionSnapshot(BaseModel):
    """Tags of the objects involved in an action, as of the transaction."""

    action_tags: dict[str, Any] = Field(default_factory=dict)
    flavor_tags: dict[str, Any] = Field(default_factory=dict)
    source_account_tags: dict[str, Any] = Field(default_factory=dict)
    destination_account_tags: dict[str, Any] = Field(default_factory=dict)
    token_tags: dict[str, Any] = Field(default_factory=dict)
    transaction_tags: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class Action(BaseModel):
    """A single issuance, transfer or retirement within a transaction."""

    id: str = Field(..., min_length=1)
    type: ActionType
    flavor_id: str
    amount: int = Field(..., ge=0)
    source_account_id: str | None = None
    destination_account_id: str | None = None
    transaction_id: str | None = None
    timestamp: datetime | None = None
    tags: dict[str, Any] = Field(default_factory=dict)
    snapshot: ActionSnapshot | None = None

    model_config = ConfigDict(frozen=True)


class ActionSum(BaseModel):
    """Summed amount of a group of actions.

    Only the fields named in the query's group_by are populated; grouping by
    nested tag paths comes back as extra fields.
    """

    amount: int
    type: ActionType | None = None
    flavor_id: str | None = None
    source_account_id: str | None = None
    destination_account_id: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")
