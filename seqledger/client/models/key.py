"""Key data model."""

from pydantic import BaseModel, ConfigDict, Field


class Key(BaseModel):
    """A signing key managed by the ledger."""

    id: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)


class NewKey(BaseModel):
    """Payload of a create-key request."""

    id: str | None = None

    model_config = ConfigDict(frozen=True)
