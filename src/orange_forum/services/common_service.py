"""Data shared by every page, and site statistics."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from orange_forum.db.session import best_effort
from orange_forum.models import Comment, Group, Topic, User
from orange_forum.services.config_service import ForumConfig
from orange_forum.services.note_service import NoteLink, read_extra_notes_short


class RequestContext(Protocol):
    """What the core needs from the caller's session transport."""

    csrf_token: str
    user_id: int | None

    def flash_msg(self) -> str:
        """Return and clear the pending flash message."""
        ...


@dataclass
class CommonData:
    csrf: str
    msg: str
    username: str
    karma: int
    forum_name: str
    extra_notes_short: list[NoteLink] = field(default_factory=list)


@best_effort(("", 0))
def _read_identity(db: Session, user_id: int) -> tuple[str, int]:
    row = db.execute(select(User.username, User.karma).where(User.id == user_id)).first()
    if row is None:
        return "", 0
    return row.username, row.karma


def read_common_data(db: Session, ctx: RequestContext, config: ForumConfig) -> CommonData:
    """Assemble the per-page bundle: CSRF token, flash, caller and notes."""
    username, karma = ("", 0)
    if ctx.user_id is not None:
        username, karma = _read_identity(db, ctx.user_id)
    return CommonData(
        csrf=ctx.csrf_token,
        msg=ctx.flash_msg(),
        username=username,
        karma=karma,
        forum_name=config.forum_name,
        extra_notes_short=list(read_extra_notes_short(db)),
    )


def _count(db: Session, model) -> int:
    return db.scalar(select(func.count()).select_from(model)) or 0


@best_effort(0)
def num_users(db: Session) -> int:
    return _count(db, User)


@best_effort(0)
def num_groups(db: Session) -> int:
    return _count(db, Group)


@best_effort(0)
def num_topics(db: Session) -> int:
    return _count(db, Topic)


@best_effort(0)
def num_comments(db: Session) -> int:
    return _count(db, Comment)
