"""Shared response and request models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SuccessMessage(BaseModel):
    """Bare acknowledgement returned by update operations."""

    message: str = "ok"

    model_config = ConfigDict(frozen=True)


class TagUpdate(BaseModel):
    """Payload of an update-*-tags request.

    The tag set replaces the existing one, so re-sending the same update is
    safe.
    """

    id: str = Field(..., min_length=1)
    tags: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
