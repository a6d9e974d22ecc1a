"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field

VoteName = Literal["up", "down", "flag"]


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    vote: VoteName = Field(..., description="up, down or flag")


class VoteResponse(BaseModel):
    """The caller's vote on an item; None when they have not voted."""

    vote: VoteName | None = None
