"""Voting and karma accounting.

A vote inserts one row, bumps the matching counter on the voted item and
moves the item author's karma by :attr:`VoteType.karma_weight`, all in one
transaction. Counters are changed with SQL-side increments so concurrent
votes do not lose updates. Each user may vote once per item; the unique
constraint on the vote tables backs that rule under concurrent requests.
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from orange_forum.core.errors import (
    AlreadyVotedError,
    CommentNotFoundError,
    GroupNotFoundError,
    TopicNotFoundError,
    ValidationFailureError,
)
from orange_forum.db.session import guard_store, unit_of_work
from orange_forum.db.time import now_epoch
from orange_forum.models import Comment, CommentVote, Group, Topic, TopicVote, User, VoteType

logger = logging.getLogger(__name__)

_COUNTER_FOR = {
    VoteType.UP: "upvotes",
    VoteType.DOWN: "downvotes",
    VoteType.FLAG: "flagvotes",
}


def _apply(db: Session, model: type[Topic] | type[Comment], target_id: int,
           author_id: int, vote_type: VoteType) -> None:
    counter = getattr(model, _COUNTER_FOR[vote_type])
    db.execute(
        update(model)
        .where(model.id == target_id)
        .values({counter: counter + 1}),
        execution_options={"synchronize_session": "fetch"},
    )
    if vote_type.karma_weight:
        db.execute(
            update(User)
            .where(User.id == author_id)
            .values(karma=User.karma + vote_type.karma_weight),
            execution_options={"synchronize_session": "fetch"},
        )


def _vote_type(value: int) -> VoteType:
    try:
        return VoteType(value)
    except ValueError as err:
        raise ValidationFailureError(f"Unknown vote type {value!r}.") from err


def _has_voted(db: Session, vote_model, target_column, user_id: int, target_id: int) -> bool:
    found = db.scalar(
        select(vote_model.id).where(vote_model.user_id == user_id, target_column == target_id)
    )
    return found is not None


def _require_open_group(db: Session, topic: Topic) -> None:
    group = db.get(Group, topic.group_id)
    if group is None or group.is_closed:
        raise GroupNotFoundError()


@guard_store
def cast_topic_vote(db: Session, user_id: int, topic_id: int, vote_type: VoteType) -> None:
    """Record ``user_id``'s vote on a topic.

    Raises:
        TopicNotFoundError: If the topic is missing or deleted.
        GroupNotFoundError: If the topic's group is closed.
        ValidationFailureError: If ``vote_type`` is not a known code.
        AlreadyVotedError: If the user already voted on this topic.
    """
    vote_type = _vote_type(vote_type)
    with unit_of_work(db, conflict=AlreadyVotedError):
        topic = db.get(Topic, topic_id)
        if topic is None or topic.is_deleted:
            raise TopicNotFoundError()
        _require_open_group(db, topic)
        if _has_voted(db, TopicVote, TopicVote.topic_id, user_id, topic_id):
            raise AlreadyVotedError()
        db.add(TopicVote(
            user_id=user_id,
            topic_id=topic_id,
            vote_type=int(vote_type),
            created_date=now_epoch(),
        ))
        db.flush()
        _apply(db, Topic, topic_id, topic.author_id, vote_type)
    logger.info("User %s voted %s on topic %s", user_id, vote_type.name, topic_id)


@guard_store
def cast_comment_vote(db: Session, user_id: int, comment_id: int, vote_type: VoteType) -> None:
    """Record ``user_id``'s vote on a comment.

    Raises:
        CommentNotFoundError: If the comment or its topic is missing or deleted.
        GroupNotFoundError: If the topic's group is closed.
        ValidationFailureError: If ``vote_type`` is not a known code.
        AlreadyVotedError: If the user already voted on this comment.
    """
    vote_type = _vote_type(vote_type)
    with unit_of_work(db, conflict=AlreadyVotedError):
        comment = db.get(Comment, comment_id)
        if comment is None or comment.is_deleted:
            raise CommentNotFoundError()
        topic = db.get(Topic, comment.topic_id)
        if topic is None or topic.is_deleted:
            raise CommentNotFoundError()
        _require_open_group(db, topic)
        if _has_voted(db, CommentVote, CommentVote.comment_id, user_id, comment_id):
            raise AlreadyVotedError()
        db.add(CommentVote(
            user_id=user_id,
            comment_id=comment_id,
            vote_type=int(vote_type),
            created_date=now_epoch(),
        ))
        db.flush()
        _apply(db, Comment, comment_id, comment.author_id, vote_type)
    logger.info("User %s voted %s on comment %s", user_id, vote_type.name, comment_id)


@guard_store
def read_topic_vote(db: Session, user_id: int, topic_id: int) -> VoteType | None:
    """Return the user's vote on the topic, if any."""
    value = db.scalar(
        select(TopicVote.vote_type).where(TopicVote.user_id == user_id, TopicVote.topic_id == topic_id)
    )
    return None if value is None else VoteType(value)


@guard_store
def read_comment_vote(db: Session, user_id: int, comment_id: int) -> VoteType | None:
    value = db.scalar(
        select(CommentVote.vote_type).where(
            CommentVote.user_id == user_id, CommentVote.comment_id == comment_id
        )
    )
    return None if value is None else VoteType(value)


def _tally(db: Session, vote_model, target_column, target_id: int) -> dict[str, int]:
    rows = db.execute(
        select(vote_model.vote_type, func.count())
        .where(target_column == target_id)
        .group_by(vote_model.vote_type)
    ).all()
    counts = {name: 0 for name in _COUNTER_FOR.values()}
    for vote_type, count in rows:
        counts[_COUNTER_FOR[VoteType(vote_type)]] = count
    return counts


@guard_store
def recount_topic_votes(db: Session, topic_id: int) -> dict[str, int]:
    """Rebuild a topic's cached counters from its vote rows."""
    with unit_of_work(db):
        counts = _tally(db, TopicVote, TopicVote.topic_id, topic_id)
        result = db.execute(update(Topic).where(Topic.id == topic_id).values(**counts))
        if result.rowcount == 0:
            raise TopicNotFoundError()
    return counts


@guard_store
def recount_comment_votes(db: Session, comment_id: int) -> dict[str, int]:
    """Rebuild a comment's cached counters from its vote rows."""
    with unit_of_work(db):
        counts = _tally(db, CommentVote, CommentVote.comment_id, comment_id)
        result = db.execute(update(Comment).where(Comment.id == comment_id).values(**counts))
        if result.rowcount == 0:
            raise CommentNotFoundError()
    return counts
