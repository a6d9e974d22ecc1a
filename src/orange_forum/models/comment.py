# src/orange_forum/models/comment.py
"""SQLAlchemy model for threaded comments."""

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from orange_forum.db.session import Base


class Comment(Base):
    """Reply to a topic or to another comment of the same topic."""

    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_topic_id", "topic_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    author_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    topic_id: Mapped[int] = mapped_column(Integer, ForeignKey("topics.id"), nullable=False)

    # Parent chain for threading; direct replies to the topic have parent_id = NULL.
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comments.id"),
        nullable=True,
    )

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_sticky: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    flagvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    updated_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
