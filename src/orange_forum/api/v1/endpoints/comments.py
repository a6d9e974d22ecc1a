# src/orange_forum/api/v1/endpoints/comments.py
"""Comment endpoints. Creation and listing live under /topics."""

from __future__ import annotations

from fastapi import APIRouter, Response, status
from sqlalchemy.orm import Session

from orange_forum.models import Comment, User
from orange_forum.schemas.content import CommentResponse, CommentUpdate
from orange_forum.services import comment_service, topic_service
from orange_forum.services.role_service import Privilege, require_privilege

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from ..visibility import comment_view, moderates

router = APIRouter(prefix="/comments", tags=["comments"])


def _require(db: Session, user: User, comment: Comment, needed: Privilege) -> None:
    topic = topic_service.read_topic(db, comment.topic_id)
    require_privilege(db, user, needed, group_id=topic.group_id, author_id=comment.author_id)


@router.get("/{comment_id}", response_model=CommentResponse)
def get_comment(comment_id: int, db: SessionDep, viewer: OptionalUserDep) -> CommentResponse:
    comment = comment_service.read_comment(db, comment_id)
    topic = topic_service.read_topic(db, comment.topic_id)
    return comment_view(comment, viewer, moderates(db, viewer, topic.group_id))


@router.put("/{comment_id}", response_model=CommentResponse)
def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Comment:
    comment = comment_service.read_comment(db, comment_id)
    _require(db, current_user, comment, Privilege.AUTHOR)
    if payload.is_sticky is not None:
        _require(db, current_user, comment, Privilege.GROUP_MOD)

    comment_service.update_comment(db, comment_id, payload.content)
    if payload.is_sticky is not None:
        comment_service.set_comment_sticky(db, comment_id, payload.is_sticky)
    db.refresh(comment)
    return comment


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_comment(comment_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    comment = comment_service.read_comment(db, comment_id)
    _require(db, current_user, comment, Privilege.AUTHOR)
    comment_service.delete_comment(db, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{comment_id}/undelete", response_model=CommentResponse)
def undelete_comment(comment_id: int, current_user: CurrentUserDep, db: SessionDep) -> Comment:
    comment = comment_service.read_comment(db, comment_id)
    _require(db, current_user, comment, Privilege.GROUP_MOD)
    comment_service.undelete_comment(db, comment_id)
    db.refresh(comment)
    return comment
