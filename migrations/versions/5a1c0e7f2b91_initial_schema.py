"""initial forum schema

Revision ID: 5a1c0e7f2b91
Revises:
Create Date: 2026-10-19 09:12:40.318224

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5a1c0e7f2b91"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _dates(*names: str) -> list[sa.Column]:
    return [sa.Column(name, sa.BigInteger(), nullable=False, server_default="0") for name in names]


def _counters() -> list[sa.Column]:
    return [
        sa.Column(name, sa.Integer(), nullable=False, server_default="0")
        for name in ("upvotes", "downvotes", "flagvotes")
    ]


def _flag(name: str) -> sa.Column:
    return sa.Column(name, sa.Boolean(), nullable=False, server_default=sa.false())


def upgrade() -> None:
    """Create every forum table."""
    op.create_table(
        "configs",
        sa.Column("key", sa.Text(), nullable=False),
        sa.Column("val", sa.Text(), nullable=False, server_default=""),
        sa.PrimaryKeyConstraint("key"),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("passwd_hash", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False, server_default=""),
        sa.Column("about", sa.Text(), nullable=False, server_default=""),
        sa.Column("karma", sa.Integer(), nullable=False, server_default="0"),
        _flag("is_banned"),
        _flag("is_superadmin"),
        sa.Column("reset_token", sa.Text(), nullable=False, server_default=""),
        *_dates("reset_token_date", "created_date", "updated_date"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_index("ix_users_reset_token", "users", ["reset_token"])
    op.create_table(
        "groups",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("header_msg", sa.Text(), nullable=False, server_default=""),
        _flag("is_sticky"),
        _flag("is_private"),
        _flag("is_closed"),
        *_dates("created_date", "updated_date"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    for table in ("mods", "admins"):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id"), nullable=False),
            *_dates("created_date"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("user_id", "group_id", name=f"uq_{table}_user_group"),
        )
    op.create_table(
        "topics",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False, server_default=""),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("author_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id"), nullable=False),
        _flag("is_deleted"),
        _flag("is_sticky"),
        _flag("is_closed"),
        sa.Column("num_comments", sa.Integer(), nullable=False, server_default="0"),
        *_counters(),
        *_dates("created_date", "updated_date"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_topics_group_id", "topics", ["group_id"])
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("author_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("topic_id", sa.Integer(), sa.ForeignKey("topics.id"), nullable=False),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("comments.id"), nullable=True),
        _flag("is_deleted"),
        _flag("is_sticky"),
        *_counters(),
        *_dates("created_date", "updated_date"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comments_topic_id", "comments", ["topic_id"])
    op.create_table(
        "topicvotes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("topic_id", sa.Integer(), sa.ForeignKey("topics.id"), nullable=False),
        sa.Column("vote_type", sa.SmallInteger(), nullable=False),
        *_dates("created_date"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("vote_type IN (1, 2, 3)", name="ck_topicvotes_vote_type"),
        sa.UniqueConstraint("user_id", "topic_id", name="uq_topicvotes_user_topic"),
    )
    op.create_table(
        "commentvotes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("comment_id", sa.Integer(), sa.ForeignKey("comments.id"), nullable=False),
        sa.Column("vote_type", sa.SmallInteger(), nullable=False),
        *_dates("created_date"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("vote_type IN (1, 2, 3)", name="ck_commentvotes_vote_type"),
        sa.UniqueConstraint("user_id", "comment_id", name="uq_commentvotes_user_comment"),
    )
    op.create_table(
        "topicsubscriptions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("topic_id", sa.Integer(), sa.ForeignKey("topics.id"), nullable=False),
        *_dates("created_date"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "topic_id", name="uq_topicsubscriptions_user_topic"),
    )
    op.create_table(
        "groupsubscriptions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id"), nullable=False),
        *_dates("created_date"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "group_id", name="uq_groupsubscriptions_user_group"),
    )
    op.create_table(
        "extranotes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("url", sa.Text(), nullable=False, server_default=""),
        *_dates("created_date", "updated_date"),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop every forum table."""
    for table in (
        "extranotes",
        "groupsubscriptions",
        "topicsubscriptions",
        "commentvotes",
        "topicvotes",
    ):
        op.drop_table(table)
    op.drop_index("ix_comments_topic_id", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_topics_group_id", table_name="topics")
    op.drop_table("topics")
    op.drop_table("admins")
    op.drop_table("mods")
    op.drop_table("groups")
    op.drop_index("ix_users_reset_token", table_name="users")
    op.drop_table("users")
    op.drop_table("configs")
