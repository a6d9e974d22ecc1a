# src/orange_forum/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Orange Forum API."""

from __future__ import annotations

from fastapi import APIRouter, status

from orange_forum.models import VoteType
from orange_forum.schemas.vote import VoteCreate, VoteResponse
from orange_forum.services import vote_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/votes", tags=["votes"])

_VOTE_TYPES = {"up": VoteType.UP, "down": VoteType.DOWN, "flag": VoteType.FLAG}


def _vote_name(vote_type: VoteType | None) -> str | None:
    return None if vote_type is None else vote_type.name.lower()


@router.post("/topics/{topic_id}", status_code=status.HTTP_201_CREATED)
def vote_topic(
    topic_id: int,
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, str]:
    """Cast a vote on a topic. A second vote on the same topic is rejected."""
    vote_service.cast_topic_vote(db, current_user.id, topic_id, _VOTE_TYPES[vote_data.vote])
    return {"status": "success"}


@router.post("/comments/{comment_id}", status_code=status.HTTP_201_CREATED)
def vote_comment(
    comment_id: int,
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, str]:
    """Cast a vote on a comment. A second vote on the same comment is rejected."""
    vote_service.cast_comment_vote(db, current_user.id, comment_id, _VOTE_TYPES[vote_data.vote])
    return {"status": "success"}


@router.get("/topics/{topic_id}/my-vote", response_model=VoteResponse)
def my_topic_vote(topic_id: int, current_user: CurrentUserDep, db: SessionDep) -> VoteResponse:
    """Get current user's vote on a specific topic."""
    return VoteResponse(vote=_vote_name(vote_service.read_topic_vote(db, current_user.id, topic_id)))


@router.get("/comments/{comment_id}/my-vote", response_model=VoteResponse)
def my_comment_vote(
    comment_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    vote = vote_service.read_comment_vote(db, current_user.id, comment_id)
    return VoteResponse(vote=_vote_name(vote))
