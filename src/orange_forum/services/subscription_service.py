"""Topic and group subscriptions.

Subscriptions are bare membership rows. The notification mailer (outside
this package) asks for subscriber emails when something new is posted.
"""
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from orange_forum.core.errors import (
    FeatureDisabledError,
    GroupNotFoundError,
    TopicNotFoundError,
)
from orange_forum.db.session import guard_store, unit_of_work
from orange_forum.db.time import now_epoch
from orange_forum.models import Group, GroupSubscription, Topic, TopicSubscription, User
from orange_forum.services.config_service import ForumConfig

logger = logging.getLogger(__name__)


@guard_store
def subscribe_topic(db: Session, config: ForumConfig, user_id: int, topic_id: int) -> None:
    """Subscribe the user to a topic. Subscribing twice is a no-op."""
    if not config.allow_topic_subscription:
        raise FeatureDisabledError("Topic subscriptions are disabled.")
    with unit_of_work(db):
        if db.get(Topic, topic_id) is None:
            raise TopicNotFoundError()
        exists = db.scalar(
            select(TopicSubscription.id).where(
                TopicSubscription.user_id == user_id, TopicSubscription.topic_id == topic_id
            )
        )
        if exists is None:
            db.add(TopicSubscription(user_id=user_id, topic_id=topic_id, created_date=now_epoch()))


@guard_store
def unsubscribe_topic(db: Session, user_id: int, topic_id: int) -> None:
    with unit_of_work(db):
        db.execute(
            delete(TopicSubscription).where(
                TopicSubscription.user_id == user_id, TopicSubscription.topic_id == topic_id
            )
        )


@guard_store
def is_subscribed_topic(db: Session, user_id: int, topic_id: int) -> bool:
    found = db.scalar(
        select(TopicSubscription.id).where(
            TopicSubscription.user_id == user_id, TopicSubscription.topic_id == topic_id
        )
    )
    return found is not None


@guard_store
def subscribe_group(db: Session, config: ForumConfig, user_id: int, group_id: int) -> None:
    """Subscribe the user to a group. Subscribing twice is a no-op."""
    if not config.allow_group_subscription:
        raise FeatureDisabledError("Group subscriptions are disabled.")
    with unit_of_work(db):
        if db.get(Group, group_id) is None:
            raise GroupNotFoundError()
        exists = db.scalar(
            select(GroupSubscription.id).where(
                GroupSubscription.user_id == user_id, GroupSubscription.group_id == group_id
            )
        )
        if exists is None:
            db.add(GroupSubscription(user_id=user_id, group_id=group_id, created_date=now_epoch()))


@guard_store
def unsubscribe_group(db: Session, user_id: int, group_id: int) -> None:
    with unit_of_work(db):
        db.execute(
            delete(GroupSubscription).where(
                GroupSubscription.user_id == user_id, GroupSubscription.group_id == group_id
            )
        )


@guard_store
def is_subscribed_group(db: Session, user_id: int, group_id: int) -> bool:
    found = db.scalar(
        select(GroupSubscription.id).where(
            GroupSubscription.user_id == user_id, GroupSubscription.group_id == group_id
        )
    )
    return found is not None


@guard_store
def read_topic_subscriber_emails(db: Session, topic_id: int) -> list[str]:
    """Emails of non-banned subscribers that have one on file."""
    stmt = (
        select(User.email)
        .join(TopicSubscription, TopicSubscription.user_id == User.id)
        .where(
            TopicSubscription.topic_id == topic_id,
            User.is_banned.is_(False),
            User.email != "",
        )
    )
    return list(db.scalars(stmt))


@guard_store
def read_group_subscriber_emails(db: Session, group_id: int) -> list[str]:
    """Emails of non-banned subscribers that have one on file."""
    stmt = (
        select(User.email)
        .join(GroupSubscription, GroupSubscription.user_id == User.id)
        .where(
            GroupSubscription.group_id == group_id,
            User.is_banned.is_(False),
            User.email != "",
        )
    )
    return list(db.scalars(stmt))
