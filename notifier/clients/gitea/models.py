"""Gitea API resource models.

Only the fields the notifier reads or writes are modeled; unknown response
fields are ignored.
"""

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class StatusState(str, Enum):
    """Commit status states accepted by Gitea."""

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"
    FAILURE = "failure"
    WARNING = "warning"


class GiteaUser(BaseModel):
    id: int = 0
    login: str = ""

    @field_validator("login", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        return "" if v is None else v


class GiteaStatus(BaseModel):
    """A commit status as returned by the API.

    Gitea serializes the state of an existing status as ``status``.
    """

    id: int = 0
    context: str = ""
    state: str = Field(default="", validation_alias=AliasChoices("status", "state"))
    description: str = ""
    target_url: str = ""

    @field_validator("context", "state", "description", "target_url", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        """Gitea serializes unset strings as null."""
        return "" if v is None else v


class CreateStatusOption(BaseModel):
    """Body of a create-status request."""

    state: StatusState
    target_url: str = ""
    description: str = ""
    context: str = ""


class GiteaComment(BaseModel):
    id: int
    body: str = ""
    user: Optional[GiteaUser] = None

    @field_validator("body", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        return "" if v is None else v
