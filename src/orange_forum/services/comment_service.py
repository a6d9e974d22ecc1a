"""Threaded comments under topics."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from orange_forum.core.errors import (
    CommentNotFoundError,
    GroupNotFoundError,
    TopicNotFoundError,
    ValidationFailureError,
)
from orange_forum.core.settings import settings
from orange_forum.db.session import guard_store, unit_of_work
from orange_forum.db.time import now_epoch
from orange_forum.models import Comment, Group, Topic

logger = logging.getLogger(__name__)


@dataclass
class CommentNode:
    """A comment together with its direct replies."""

    comment: Comment
    replies: list[CommentNode] = field(default_factory=list)


@guard_store
def create_comment(
    db: Session,
    author_id: int,
    topic_id: int,
    content: str,
    parent_id: int | None = None,
) -> Comment:
    """Reply to a topic, or to ``parent_id`` within the same topic.

    Increments the topic's comment counter in the same transaction.

    Raises:
        TopicNotFoundError: If the topic is missing or deleted.
        GroupNotFoundError: If the topic's group is closed.
        ValidationFailureError: If the topic is closed, the content is empty,
            or the parent belongs to another topic.
    """
    if not content:
        raise ValidationFailureError("Comment cannot be empty.")
    now = now_epoch()
    with unit_of_work(db):
        topic = db.get(Topic, topic_id)
        if topic is None or topic.is_deleted:
            raise TopicNotFoundError()
        group = db.get(Group, topic.group_id)
        if group is None or group.is_closed:
            raise GroupNotFoundError()
        if topic.is_closed:
            raise ValidationFailureError("Topic is closed for comments.")
        if parent_id is not None:
            parent = db.get(Comment, parent_id)
            if parent is None or parent.topic_id != topic_id:
                raise ValidationFailureError("Parent comment is not part of this topic.")

        comment = Comment(
            content=content,
            author_id=author_id,
            topic_id=topic_id,
            parent_id=parent_id,
            created_date=now,
            updated_date=now,
        )
        db.add(comment)
        db.execute(
            update(Topic)
            .where(Topic.id == topic_id)
            .values(num_comments=Topic.num_comments + 1, updated_date=now)
        )
        db.flush()
    logger.info("User %s commented %d on topic %s", author_id, comment.id, topic_id)
    return comment


@guard_store
def read_comment(db: Session, comment_id: int) -> Comment:
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise CommentNotFoundError()
    return comment


@guard_store
def read_topic_comments(
    db: Session,
    topic_id: int,
    after: int | None = None,
    limit: int | None = None,
) -> Sequence[Comment]:
    """Return a page of comments, sticky first then oldest first.

    ``after`` is the created date of the last comment already shown; only
    later comments are returned.
    """
    stmt = select(Comment).where(Comment.topic_id == topic_id)
    if after is not None:
        stmt = stmt.where(Comment.created_date > after)
    stmt = stmt.order_by(
        Comment.is_sticky.desc(), Comment.created_date, Comment.id
    ).limit(limit or settings.comments_per_page)
    return db.scalars(stmt).all()


@guard_store
def read_comment_tree(db: Session, topic_id: int) -> list[CommentNode]:
    """Return the topic's comments nested by ``parent_id``.

    Deleted comments stay in place so their replies keep a parent.
    """
    comments = db.scalars(
        select(Comment)
        .where(Comment.topic_id == topic_id)
        .order_by(Comment.is_sticky.desc(), Comment.created_date, Comment.id)
    ).all()

    nodes = {comment.id: CommentNode(comment) for comment in comments}
    roots: list[CommentNode] = []
    for comment in comments:
        node = nodes[comment.id]
        parent = nodes.get(comment.parent_id) if comment.parent_id is not None else None
        if parent is None:
            roots.append(node)
        else:
            parent.replies.append(node)
    return roots


def _update(db: Session, comment_id: int, **values) -> None:
    with unit_of_work(db):
        result = db.execute(
            update(Comment)
            .where(Comment.id == comment_id)
            .values(updated_date=now_epoch(), **values)
        )
        if result.rowcount == 0:
            raise CommentNotFoundError()


@guard_store
def update_comment(db: Session, comment_id: int, content: str) -> None:
    if not content:
        raise ValidationFailureError("Comment cannot be empty.")
    _update(db, comment_id, content=content)


@guard_store
def delete_comment(db: Session, comment_id: int) -> None:
    """Soft-delete; the comment keeps its place in the thread."""
    _update(db, comment_id, is_deleted=True)
    logger.info("Deleted comment %s", comment_id)


@guard_store
def undelete_comment(db: Session, comment_id: int) -> None:
    _update(db, comment_id, is_deleted=False)


@guard_store
def set_comment_sticky(db: Session, comment_id: int, sticky: bool) -> None:
    _update(db, comment_id, is_sticky=sticky)
