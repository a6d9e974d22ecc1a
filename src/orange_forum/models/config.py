# src/orange_forum/models/config.py
"""Key/value settings overlay."""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from orange_forum.db.session import Base


class Config(Base):
    """One forum setting. Values are always strings; flags use "0"/"1"."""

    __tablename__ = "configs"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    val: Mapped[str] = mapped_column(Text, nullable=False, default="")
