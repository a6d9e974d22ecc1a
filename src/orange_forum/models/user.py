# src/orange_forum/models/user.py
"""SQLAlchemy model for registered forum users."""

from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from orange_forum.db.session import Base


class User(Base):
    """A registered account.

    Users are never physically removed; banning toggles ``is_banned``.
    ``karma`` is only adjusted by the voting engine and may go negative.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    # Hex encoding of the bcrypt hash bytes.
    passwd_hash: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, default="")
    about: Mapped[str] = mapped_column(Text, nullable=False, default="")
    karma: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_superadmin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Empty string means no outstanding reset token.
    reset_token: Mapped[str] = mapped_column(Text, nullable=False, default="", index=True)
    reset_token_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    created_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    updated_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
