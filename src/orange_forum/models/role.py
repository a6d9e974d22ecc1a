# src/orange_forum/models/role.py
"""Per-group role grants."""

from sqlalchemy import BigInteger, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from orange_forum.db.session import Base


class Mod(Base):
    """Grants moderator rights in one group."""

    __tablename__ = "mods"
    __table_args__ = (
        UniqueConstraint("user_id", "group_id", name="uq_mods_user_group"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    group_id: Mapped[int] = mapped_column(Integer, ForeignKey("groups.id"), nullable=False)
    created_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class Admin(Base):
    """Grants admin rights in one group. Admin implies every Mod right."""

    __tablename__ = "admins"
    __table_args__ = (
        UniqueConstraint("user_id", "group_id", name="uq_admins_user_group"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    group_id: Mapped[int] = mapped_column(Integer, ForeignKey("groups.id"), nullable=False)
    created_date: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
