# src/orange_forum/models/topic.py
"""SQLAlchemy model for topics."""

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from orange_forum.db.session import Base


class Topic(Base):
    """Top-level post inside a group; root of a comment thread."""

    __tablename__ = "topics"
    __table_args__ = (
        Index("ix_topics_group_id", "group_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    author_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    group_id: Mapped[int] = mapped_column(Integer, ForeignKey("groups.id"), nullable=False)

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_sticky: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Closed topics accept no new comments.
    is_closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Denormalized caches of the comments and topicvotes tables.
    num_comments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    flagvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    updated_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
