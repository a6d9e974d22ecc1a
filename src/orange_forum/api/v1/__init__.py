# src/orange_forum/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    comments_router,
    groups_router,
    site_router,
    topics_router,
    users_router,
    votes_router,
)

__all__ = [
    "auth_router",
    "comments_router",
    "groups_router",
    "site_router",
    "topics_router",
    "users_router",
    "votes_router",
]
