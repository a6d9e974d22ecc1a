# tests/services/test_content.py
"""Tests for groups, topics and threaded comments."""

import pytest
from sqlalchemy import update
from sqlalchemy.orm import Session

from orange_forum.core.errors import (
    CommentNotFoundError,
    GroupAlreadyExistsError,
    GroupNotFoundError,
    TopicNotFoundError,
    ValidationFailureError,
)
from orange_forum.models import Topic
from orange_forum.services import comment_service, group_service, topic_service


# --- groups ---------------------------------------------------------------

def test_group_names_are_unique(db_session: Session, group) -> None:
    with pytest.raises(GroupAlreadyExistsError):
        group_service.create_group(db_session, "python")


def test_closed_group_name_stays_taken(db_session: Session, group) -> None:
    group_service.delete_group(db_session, group.id)
    with pytest.raises(GroupAlreadyExistsError):
        group_service.create_group(db_session, "python")


def test_group_soft_delete(db_session: Session, group) -> None:
    group_service.create_group(db_session, "rust")
    group_service.delete_group(db_session, group.id)

    assert group_service.read_group_is_deleted(db_session, group.id) is True
    assert [g.name for g in group_service.read_groups(db_session)] == ["rust"]
    assert len(group_service.read_groups(db_session, include_closed=True)) == 2

    group_service.undelete_group(db_session, group.id)
    assert group_service.read_group_is_deleted(db_session, group.id) is False


def test_group_field_reads(db_session: Session, group) -> None:
    assert group_service.read_group_name(db_session, group.id) == "python"
    assert group_service.read_group_desc(db_session, group.id) == "All things Python"
    assert group_service.read_group_header_msg(db_session, group.id) == "Be nice"
    assert group_service.read_group_id_by_name(db_session, "python") == group.id

    assert group_service.read_group_name(db_session, 9999) == ""
    assert group_service.read_group_is_deleted(db_session, 9999) is False
    assert group_service.read_group_id_by_name(db_session, "nope") is None


def test_sticky_groups_listed_first(db_session: Session, group) -> None:
    zed = group_service.create_group(db_session, "zed")
    group_service.set_group_sticky(db_session, zed.id, True)
    assert [g.name for g in group_service.read_groups(db_session)] == ["zed", "python"]


def test_update_missing_group(db_session: Session) -> None:
    with pytest.raises(GroupNotFoundError):
        group_service.update_group(db_session, 9999, "x", "", "")


# --- topics ---------------------------------------------------------------

def test_topic_needs_open_group(db_session: Session, test_user, group) -> None:
    group_service.delete_group(db_session, group.id)
    with pytest.raises(GroupNotFoundError):
        topic_service.create_topic(db_session, test_user.id, group.id, "Hi")
    with pytest.raises(GroupNotFoundError):
        topic_service.create_topic(db_session, test_user.id, 9999, "Hi")


def test_topic_title_required(db_session: Session, test_user, group) -> None:
    with pytest.raises(ValidationFailureError):
        topic_service.create_topic(db_session, test_user.id, group.id, "")


def test_topic_listing_order(db_session: Session, test_user, group) -> None:
    first = topic_service.create_topic(db_session, test_user.id, group.id, "first")
    second = topic_service.create_topic(db_session, test_user.id, group.id, "second")
    third = topic_service.create_topic(db_session, test_user.id, group.id, "third")

    listed = topic_service.read_group_topics(db_session, group.id)
    assert [t.id for t in listed] == [third.id, second.id, first.id]

    topic_service.set_topic_sticky(db_session, first.id, True)
    topic_service.delete_topic(db_session, second.id)
    listed = topic_service.read_group_topics(db_session, group.id)
    assert [t.id for t in listed] == [first.id, third.id]

    listed = topic_service.read_group_topics(db_session, group.id, include_deleted=True)
    assert second.id in [t.id for t in listed]


def test_topic_paging(db_session: Session, test_user, group) -> None:
    ids = []
    for n in range(5):
        topic = topic_service.create_topic(db_session, test_user.id, group.id, f"t{n}")
        db_session.execute(update(Topic).where(Topic.id == topic.id).values(created_date=1000 + n))
        ids.append(topic.id)
    db_session.commit()

    page = topic_service.read_group_topics(db_session, group.id, limit=2)
    assert [t.id for t in page] == [ids[4], ids[3]]
    page = topic_service.read_group_topics(db_session, group.id, limit=2, before=page[-1].created_date)
    assert [t.id for t in page] == [ids[2], ids[1]]


def test_topic_update_and_flags(db_session: Session, topic) -> None:
    topic_service.update_topic(db_session, topic.id, "Renamed", "New body")
    topic_service.close_topic(db_session, topic.id)

    fresh = topic_service.read_topic(db_session, topic.id)
    assert (fresh.title, fresh.content, fresh.is_closed) == ("Renamed", "New body", True)

    topic_service.reopen_topic(db_session, topic.id)
    assert topic_service.read_topic(db_session, topic.id).is_closed is False

    with pytest.raises(TopicNotFoundError):
        topic_service.delete_topic(db_session, 9999)


# --- comments -------------------------------------------------------------

def test_comment_counts_on_topic(db_session: Session, other_user, topic) -> None:
    comment_service.create_comment(db_session, other_user.id, topic.id, "one")
    comment_service.create_comment(db_session, other_user.id, topic.id, "two")
    assert topic_service.read_topic(db_session, topic.id).num_comments == 2


def test_comment_on_closed_topic(db_session: Session, other_user, topic) -> None:
    topic_service.close_topic(db_session, topic.id)
    with pytest.raises(ValidationFailureError):
        comment_service.create_comment(db_session, other_user.id, topic.id, "late")
    assert topic_service.read_topic(db_session, topic.id).num_comments == 0


def test_comment_on_deleted_topic(db_session: Session, other_user, topic) -> None:
    topic_service.delete_topic(db_session, topic.id)
    with pytest.raises(TopicNotFoundError):
        comment_service.create_comment(db_session, other_user.id, topic.id, "hello?")


def test_comment_in_closed_group(db_session: Session, other_user, group, topic) -> None:
    group_service.delete_group(db_session, group.id)
    with pytest.raises(GroupNotFoundError):
        comment_service.create_comment(db_session, other_user.id, topic.id, "anyone?")
    assert topic_service.read_topic(db_session, topic.id).num_comments == 0


def test_reply_must_stay_in_topic(db_session: Session, test_user, other_user, group, topic) -> None:
    elsewhere = topic_service.create_topic(db_session, test_user.id, group.id, "Other")
    parent = comment_service.create_comment(db_session, other_user.id, elsewhere.id, "there")
    with pytest.raises(ValidationFailureError):
        comment_service.create_comment(db_session, other_user.id, topic.id, "here", parent.id)


def test_comment_tree(db_session: Session, test_user, other_user, topic) -> None:
    root = comment_service.create_comment(db_session, other_user.id, topic.id, "root")
    reply = comment_service.create_comment(db_session, test_user.id, topic.id, "reply", root.id)
    nested = comment_service.create_comment(db_session, other_user.id, topic.id, "nested", reply.id)
    second = comment_service.create_comment(db_session, test_user.id, topic.id, "second root")
    comment_service.delete_comment(db_session, reply.id)

    tree = comment_service.read_comment_tree(db_session, topic.id)
    assert [node.comment.id for node in tree] == [root.id, second.id]
    assert [node.comment.id for node in tree[0].replies] == [reply.id]
    assert tree[0].replies[0].comment.is_deleted is True
    assert [node.comment.id for node in tree[0].replies[0].replies] == [nested.id]


def test_flat_comment_paging(db_session: Session, other_user, topic) -> None:
    made = [
        comment_service.create_comment(db_session, other_user.id, topic.id, f"c{n}")
        for n in range(3)
    ]
    listed = comment_service.read_topic_comments(db_session, topic.id, limit=2)
    assert [c.id for c in listed] == [made[0].id, made[1].id]

    later = comment_service.read_topic_comments(db_session, topic.id, after=made[0].created_date - 1)
    assert len(later) == 3


def test_comment_edit_and_sticky(db_session: Session, other_user, topic) -> None:
    first = comment_service.create_comment(db_session, other_user.id, topic.id, "first")
    second = comment_service.create_comment(db_session, other_user.id, topic.id, "second")
    comment_service.update_comment(db_session, first.id, "edited")
    comment_service.set_comment_sticky(db_session, second.id, True)

    listed = comment_service.read_topic_comments(db_session, topic.id)
    assert [c.id for c in listed] == [second.id, first.id]
    assert comment_service.read_comment(db_session, first.id).content == "edited"

    with pytest.raises(ValidationFailureError):
        comment_service.update_comment(db_session, first.id, "")
    with pytest.raises(CommentNotFoundError):
        comment_service.read_comment(db_session, 9999)
