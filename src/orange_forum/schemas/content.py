"""Topic and comment Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TopicCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = ""


class TopicUpdate(TopicCreate):
    is_sticky: bool | None = None
    is_closed: bool | None = None


class TopicResponse(BaseModel):
    id: int
    title: str
    content: str
    author_id: int
    group_id: int
    is_deleted: bool
    is_sticky: bool
    is_closed: bool
    num_comments: int
    upvotes: int
    downvotes: int
    flagvotes: int
    created_date: int
    updated_date: int

    model_config = ConfigDict(from_attributes=True)


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)
    parent_id: int | None = None


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1)
    is_sticky: bool | None = None


class CommentResponse(BaseModel):
    id: int
    content: str
    author_id: int
    topic_id: int
    parent_id: int | None
    is_deleted: bool
    is_sticky: bool
    upvotes: int
    downvotes: int
    flagvotes: int
    created_date: int
    updated_date: int

    model_config = ConfigDict(from_attributes=True)


class CommentNodeResponse(BaseModel):
    """A comment and its nested replies."""

    comment: CommentResponse
    replies: list[CommentNodeResponse] = []

    model_config = ConfigDict(from_attributes=True)
