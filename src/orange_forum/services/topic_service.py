"""Topic creation, listing and moderation flags."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from orange_forum.core.errors import (
    GroupNotFoundError,
    TopicNotFoundError,
    ValidationFailureError,
)
from orange_forum.core.settings import settings
from orange_forum.db.session import guard_store, unit_of_work
from orange_forum.db.time import now_epoch
from orange_forum.models import Group, Topic

logger = logging.getLogger(__name__)


@guard_store
def create_topic(
    db: Session,
    author_id: int,
    group_id: int,
    title: str,
    content: str = "",
) -> Topic:
    """Post a new topic in an open group.

    Raises:
        GroupNotFoundError: If the group does not exist or is closed.
        ValidationFailureError: If ``title`` is empty.
    """
    if not title:
        raise ValidationFailureError("Topic title cannot be empty.")
    now = now_epoch()
    with unit_of_work(db):
        group = db.get(Group, group_id)
        if group is None or group.is_closed:
            raise GroupNotFoundError()
        topic = Topic(
            title=title,
            content=content,
            author_id=author_id,
            group_id=group_id,
            created_date=now,
            updated_date=now,
        )
        db.add(topic)
        db.flush()
    logger.info("User %s created topic %d in group %s", author_id, topic.id, group_id)
    return topic


@guard_store
def read_topic(db: Session, topic_id: int) -> Topic:
    topic = db.get(Topic, topic_id)
    if topic is None:
        raise TopicNotFoundError()
    return topic


@guard_store
def read_group_topics(
    db: Session,
    group_id: int,
    limit: int | None = None,
    before: int | None = None,
    include_deleted: bool = False,
) -> Sequence[Topic]:
    """Return a page of the group's topics, sticky first then newest first.

    Args:
        db: Database session.
        group_id: Group to list.
        limit: Page size; defaults to ``settings.topics_per_page``.
        before: Only topics created strictly before this epoch (next page).
        include_deleted: Include soft-deleted topics (for moderators).
    """
    stmt = select(Topic).where(Topic.group_id == group_id)
    if not include_deleted:
        stmt = stmt.where(Topic.is_deleted.is_(False))
    if before is not None:
        stmt = stmt.where(Topic.created_date < before)
    stmt = stmt.order_by(
        Topic.is_sticky.desc(), Topic.created_date.desc(), Topic.id.desc()
    ).limit(limit or settings.topics_per_page)
    return db.scalars(stmt).all()


def _update(db: Session, topic_id: int, **values) -> None:
    with unit_of_work(db):
        result = db.execute(
            update(Topic).where(Topic.id == topic_id).values(updated_date=now_epoch(), **values)
        )
        if result.rowcount == 0:
            raise TopicNotFoundError()


@guard_store
def update_topic(db: Session, topic_id: int, title: str, content: str) -> None:
    if not title:
        raise ValidationFailureError("Topic title cannot be empty.")
    _update(db, topic_id, title=title, content=content)


@guard_store
def delete_topic(db: Session, topic_id: int) -> None:
    """Soft-delete; comments and vote counts are kept."""
    _update(db, topic_id, is_deleted=True)
    logger.info("Deleted topic %s", topic_id)


@guard_store
def undelete_topic(db: Session, topic_id: int) -> None:
    _update(db, topic_id, is_deleted=False)


@guard_store
def set_topic_sticky(db: Session, topic_id: int, sticky: bool) -> None:
    _update(db, topic_id, is_sticky=sticky)


@guard_store
def close_topic(db: Session, topic_id: int) -> None:
    """Stop accepting comments on the topic."""
    _update(db, topic_id, is_closed=True)


@guard_store
def reopen_topic(db: Session, topic_id: int) -> None:
    _update(db, topic_id, is_closed=False)
