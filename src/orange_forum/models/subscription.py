# src/orange_forum/models/subscription.py
"""Membership records for topic and group notifications."""

from sqlalchemy import BigInteger, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from orange_forum.db.session import Base


class TopicSubscription(Base):
    __tablename__ = "topicsubscriptions"
    __table_args__ = (
        UniqueConstraint("user_id", "topic_id", name="uq_topicsubscriptions_user_topic"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    topic_id: Mapped[int] = mapped_column(Integer, ForeignKey("topics.id"), nullable=False)
    created_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class GroupSubscription(Base):
    __tablename__ = "groupsubscriptions"
    __table_args__ = (
        UniqueConstraint("user_id", "group_id", name="uq_groupsubscriptions_user_group"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    group_id: Mapped[int] = mapped_column(Integer, ForeignKey("groups.id"), nullable=False)
    created_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
