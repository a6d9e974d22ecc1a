# tests/services/test_common_service.py
"""Tests for per-page common data, statistics and degraded reads."""

from dataclasses import dataclass

from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from orange_forum.services import (
    comment_service,
    common_service,
    config_service,
    note_service,
    user_service,
)
from orange_forum.services.config_service import ForumConfig


@dataclass
class FakeContext:
    csrf_token: str
    user_id: int | None
    pending: str = ""

    def flash_msg(self) -> str:
        msg, self.pending = self.pending, ""
        return msg


def test_anonymous_common_data(db_session: Session) -> None:
    note = note_service.create_extra_note(db_session, "FAQ")
    ctx = FakeContext(csrf_token="tok", user_id=None, pending="Saved.")

    data = common_service.read_common_data(db_session, ctx, ForumConfig.defaults())

    assert (data.csrf, data.msg, data.username, data.karma) == ("tok", "Saved.", "", 0)
    assert data.forum_name == "Orange Forum"
    assert data.extra_notes_short == [note_service.NoteLink(id=note.id, name="FAQ")]
    assert ctx.flash_msg() == ""


def test_signed_in_common_data(db_session: Session, test_user) -> None:
    ctx = FakeContext(csrf_token="tok", user_id=test_user.id)
    data = common_service.read_common_data(db_session, ctx, ForumConfig.defaults())
    assert (data.username, data.karma) == ("alice", 0)


def test_counts(db_session: Session, other_user, topic) -> None:
    comment_service.create_comment(db_session, other_user.id, topic.id, "hi")
    assert common_service.num_users(db_session) == 2
    assert common_service.num_groups(db_session) == 1
    assert common_service.num_topics(db_session) == 1
    assert common_service.num_comments(db_session) == 1


def test_enrichment_reads_survive_missing_tables() -> None:
    bare = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    with Session(bare) as db:
        assert common_service.num_users(db) == 0
        assert config_service.read_config(db, "forum_name") == "0"
        assert user_service.read_user_karma(db, "alice") == 0
        notes = note_service.read_extra_notes_short(db)
        notes.append("leaked")
        assert note_service.read_extra_notes_short(db) == []
        data = common_service.read_common_data(
            db, FakeContext(csrf_token="c", user_id=1), ForumConfig.defaults()
        )
        assert (data.username, data.karma, data.extra_notes_short) == ("", 0, [])
    bare.dispose()
