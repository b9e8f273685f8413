"""Flavor data model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Flavor(BaseModel):
    """A taxonomy used to differentiate types of tokens in a ledger."""

    id: str = Field(..., min_length=1)
    key_ids: list[str] = Field(default_factory=list, description="Keys controlling issuance")
    quorum: int = Field(0, ge=0, description="Keys required to sign an issuance")
    tags: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class NewFlavor(BaseModel):
    """Payload of a create-flavor request."""

    id: str | None = None
    key_ids: list[str] = Field(default_factory=list)
    quorum: int | None = Field(None, gt=0)
    tags: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)
