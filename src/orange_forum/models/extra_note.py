# src/orange_forum/models/extra_note.py
"""Free-standing static content blocks (about page, rules, ...)."""

from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from orange_forum.db.session import Base


class ExtraNote(Base):
    """Static note linked from every page; unrelated to the group hierarchy."""

    __tablename__ = "extranotes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    updated_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
