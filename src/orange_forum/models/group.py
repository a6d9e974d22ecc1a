# src/orange_forum/models/group.py
"""SQLAlchemy model for forum groups."""

from sqlalchemy import BigInteger, Boolean, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from orange_forum.db.session import Base


class Group(Base):
    """Named sub-community that owns topics.

    ``is_closed`` is the soft-delete flag; closed groups keep their topics.
    """

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    header_msg: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_sticky: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    updated_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
