# src/orange_forum/models/__init__.py
"""SQLAlchemy models for the Orange Forum application."""

from .comment import Comment
from .config import Config
from .extra_note import ExtraNote
from .group import Group
from .role import Admin, Mod
from .subscription import GroupSubscription, TopicSubscription
from .topic import Topic
from .user import User
from .vote import CommentVote, TopicVote, VoteType

__all__ = [
    "Comment",
    "Config",
    "ExtraNote",
    "Group",
    "Admin", "Mod",
    "GroupSubscription", "TopicSubscription",
    "Topic",
    "User",
    "CommentVote", "TopicVote", "VoteType",
]
