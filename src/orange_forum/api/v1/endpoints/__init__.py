# src/orange_forum/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .comments import router as comments_router
from .groups import router as groups_router
from .site import router as site_router
from .topics import router as topics_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "auth_router",
    "comments_router",
    "groups_router",
    "site_router",
    "topics_router",
    "users_router",
    "votes_router",
]
