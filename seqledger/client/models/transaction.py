"""Transaction data models."""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .action import Action


class Transaction(BaseModel):
    """An atomic update to the ledger made of one or more actions."""

    id: str = Field(..., min_length=1)
    timestamp: datetime
    sequence_number: int = Field(..., ge=0)
    actions: list[Action] = Field(default_factory=list)
    tags: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class IssueAction(BaseModel):
    """Issue new tokens of a flavor into an account."""

    type: Literal["issue"] = "issue"
    flavor_id: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)
    destination_account_id: str = Field(..., min_length=1)
    token_tags: dict[str, Any] | None = None
    action_tags: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)


class TransferAction(BaseModel):
    """Move tokens from one account to another."""

    type: Literal["transfer"] = "transfer"
    flavor_id: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)
    source_account_id: str = Field(..., min_length=1)
    destination_account_id: str = Field(..., min_length=1)
    filter: str | None = None
    filter_params: list[Any] | None = None
    token_tags: dict[str, Any] | None = None
    action_tags: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)


class RetireAction(BaseModel):
    """Remove tokens from circulation."""

    type: Literal["retire"] = "retire"
    flavor_id: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)
    source_account_id: str = Field(..., min_length=1)
    filter: str | None = None
    filter_params: list[Any] | None = None
    action_tags: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)


NewAction = Annotated[IssueAction | TransferAction | RetireAction, Field(discriminator="type")]


class NewTransaction(BaseModel):
    """Payload of a transact request."""

    actions: list[NewAction] = Field(..., min_length=1)
    transaction_tags: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)
