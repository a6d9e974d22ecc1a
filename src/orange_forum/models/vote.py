# src/orange_forum/models/vote.py
"""Models capturing voting interactions on topics and comments."""

import enum

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    ForeignKey,
    Integer,
    SmallInteger,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from orange_forum.db.session import Base


class VoteType(enum.IntEnum):
    """Kinds of vote a user can cast. Values are the stored codes."""

    UP = 1
    DOWN = 2
    FLAG = 3

    @property
    def karma_weight(self) -> int:
        """Karma delta applied to the author of the voted item."""
        return _KARMA_WEIGHTS[self]


# Flags are moderation signals and carry no karma.
_KARMA_WEIGHTS = {VoteType.UP: 1, VoteType.DOWN: -1, VoteType.FLAG: 0}


class TopicVote(Base):
    """Per-user vote on a topic."""

    __tablename__ = "topicvotes"
    __table_args__ = (
        CheckConstraint("vote_type IN (1, 2, 3)", name="ck_topicvotes_vote_type"),
        # One vote per user and topic.
        UniqueConstraint("user_id", "topic_id", name="uq_topicvotes_user_topic"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    topic_id: Mapped[int] = mapped_column(Integer, ForeignKey("topics.id"), nullable=False)
    vote_type: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class CommentVote(Base):
    """Per-user vote on a comment."""

    __tablename__ = "commentvotes"
    __table_args__ = (
        CheckConstraint("vote_type IN (1, 2, 3)", name="ck_commentvotes_vote_type"),
        UniqueConstraint("user_id", "comment_id", name="uq_commentvotes_user_comment"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    comment_id: Mapped[int] = mapped_column(Integer, ForeignKey("comments.id"), nullable=False)
    vote_type: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
