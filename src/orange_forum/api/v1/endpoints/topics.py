# src/orange_forum/api/v1/endpoints/topics.py
"""Topic endpoints, including comment listing and creation under a topic."""

from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from orange_forum.models import Comment, Topic
from orange_forum.schemas.content import (
    CommentCreate,
    CommentNodeResponse,
    CommentResponse,
    TopicResponse,
    TopicUpdate,
)
from orange_forum.services import comment_service, subscription_service, topic_service
from orange_forum.services.role_service import Privilege, require_privilege

from ..dependencies import CurrentUserDep, ForumConfigDep, OptionalUserDep, SessionDep
from ..visibility import comment_tree_view, comment_views, moderates, topic_view

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("/{topic_id}", response_model=TopicResponse)
def get_topic(topic_id: int, db: SessionDep, viewer: OptionalUserDep) -> TopicResponse:
    """Deleted topics are shown with their text hidden unless the viewer may see it."""
    return topic_view(db, viewer, topic_service.read_topic(db, topic_id))


@router.put("/{topic_id}", response_model=TopicResponse)
def update_topic(
    topic_id: int,
    payload: TopicUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Topic:
    """Authors edit text; sticky and closed flags need a group moderator."""
    topic = topic_service.read_topic(db, topic_id)
    require_privilege(
        db, current_user, Privilege.AUTHOR, group_id=topic.group_id, author_id=topic.author_id
    )
    if payload.is_sticky is not None or payload.is_closed is not None:
        require_privilege(db, current_user, Privilege.GROUP_MOD, group_id=topic.group_id)

    topic_service.update_topic(db, topic_id, payload.title, payload.content)
    if payload.is_sticky is not None:
        topic_service.set_topic_sticky(db, topic_id, payload.is_sticky)
    if payload.is_closed is True:
        topic_service.close_topic(db, topic_id)
    elif payload.is_closed is False:
        topic_service.reopen_topic(db, topic_id)
    db.refresh(topic)
    return topic


@router.delete("/{topic_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_topic(topic_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    topic = topic_service.read_topic(db, topic_id)
    require_privilege(
        db, current_user, Privilege.AUTHOR, group_id=topic.group_id, author_id=topic.author_id
    )
    topic_service.delete_topic(db, topic_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{topic_id}/undelete", response_model=TopicResponse)
def undelete_topic(topic_id: int, current_user: CurrentUserDep, db: SessionDep) -> Topic:
    topic = topic_service.read_topic(db, topic_id)
    require_privilege(db, current_user, Privilege.GROUP_MOD, group_id=topic.group_id)
    topic_service.undelete_topic(db, topic_id)
    db.refresh(topic)
    return topic


@router.get("/{topic_id}/comments", response_model=list[CommentResponse])
def list_comments(
    topic_id: int,
    db: SessionDep,
    viewer: OptionalUserDep,
    after: int | None = Query(None, description="Created date of the last comment shown"),
) -> list[CommentResponse]:
    topic = topic_service.read_topic(db, topic_id)
    comments = comment_service.read_topic_comments(db, topic_id, after=after)
    return comment_views(comments, viewer, moderates(db, viewer, topic.group_id))


@router.get("/{topic_id}/comment-tree", response_model=list[CommentNodeResponse])
def comment_tree(
    topic_id: int, db: SessionDep, viewer: OptionalUserDep
) -> list[CommentNodeResponse]:
    topic = topic_service.read_topic(db, topic_id)
    return comment_tree_view(
        comment_service.read_comment_tree(db, topic_id),
        viewer,
        moderates(db, viewer, topic.group_id),
    )


@router.post(
    "/{topic_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    topic_id: int,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Comment:
    return comment_service.create_comment(
        db, current_user.id, topic_id, payload.content, payload.parent_id
    )


@router.post("/{topic_id}/subscription", status_code=status.HTTP_201_CREATED)
def subscribe(
    topic_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    config: ForumConfigDep,
) -> dict[str, str]:
    subscription_service.subscribe_topic(db, config, current_user.id, topic_id)
    return {"status": "subscribed"}


@router.delete(
    "/{topic_id}/subscription",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def unsubscribe(topic_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    subscription_service.unsubscribe_topic(db, current_user.id, topic_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
