"""Account data model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Account(BaseModel):
    """A container for tokens on a ledger."""

    id: str = Field(..., min_length=1)
    key_ids: list[str] = Field(default_factory=list, description="Keys signing spends")
    quorum: int = Field(0, ge=0, description="Keys required to sign a spend")
    tags: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class NewAccount(BaseModel):
    """Payload of a create-account request."""

    id: str | None = None
    key_ids: list[str] = Field(default_factory=list)
    quorum: int | None = Field(None, gt=0)
    tags: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)
