"""Token data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TokenGroup(BaseModel):
    """Tokens of one flavor held by one account with identical tags."""

    amount: int = Field(..., ge=0)
    flavor_id: str
    account_id: str
    flavor_tags: dict[str, Any] = Field(default_factory=dict)
    account_tags: dict[str, Any] = Field(default_factory=dict)
    tags: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class TokenSum(BaseModel):
    """Summed amount of a group of tokens (fields per the query's group_by)."""

    amount: int
    flavor_id: str | None = None
    account_id: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")
