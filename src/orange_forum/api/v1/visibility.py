# src/orange_forum/api/v1/visibility.py
"""Response views that hide the text of soft-deleted topics and comments.

Deleted items keep their place (ids, counters, tree position) but their text
is replaced with :data:`DELETED_TEXT` unless the viewer wrote the item or
moderates its group.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from orange_forum.models import Comment, Topic, User
from orange_forum.schemas.content import CommentNodeResponse, CommentResponse, TopicResponse
from orange_forum.services.comment_service import CommentNode
from orange_forum.services.role_service import Privilege, resolve_privilege

DELETED_TEXT = "[DELETED]"


def moderates(db: Session, viewer: User | None, group_id: int) -> bool:
    return resolve_privilege(db, viewer, group_id) >= Privilege.GROUP_MOD


def _reveals(viewer: User | None, author_id: int, is_mod: bool) -> bool:
    return is_mod or (viewer is not None and viewer.id == author_id)


def topic_view(db: Session, viewer: User | None, topic: Topic) -> TopicResponse:
    view = TopicResponse.model_validate(topic)
    if topic.is_deleted and not _reveals(viewer, topic.author_id, moderates(db, viewer, topic.group_id)):
        view = view.model_copy(update={"title": DELETED_TEXT, "content": DELETED_TEXT})
    return view


def comment_view(comment: Comment, viewer: User | None, is_mod: bool) -> CommentResponse:
    view = CommentResponse.model_validate(comment)
    if comment.is_deleted and not _reveals(viewer, comment.author_id, is_mod):
        view = view.model_copy(update={"content": DELETED_TEXT})
    return view


def comment_views(
    comments: Iterable[Comment], viewer: User | None, is_mod: bool
) -> list[CommentResponse]:
    return [comment_view(comment, viewer, is_mod) for comment in comments]


def comment_tree_view(
    nodes: Iterable[CommentNode], viewer: User | None, is_mod: bool
) -> list[CommentNodeResponse]:
    """Mask a comment tree, keeping every node so replies keep their parent."""
    return [
        CommentNodeResponse(
            comment=comment_view(node.comment, viewer, is_mod),
            replies=comment_tree_view(node.replies, viewer, is_mod),
        )
        for node in nodes
    ]
