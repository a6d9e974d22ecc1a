# src/orange_forum/services/__init__.py
"""Domain operations of the forum core.

Each module groups plain functions taking a SQLAlchemy ``Session`` first.
Mutations run in a single unit of work; raw store faults surface as
:class:`~orange_forum.core.errors.StoreError`.
"""

from .config_service import ConfigKey, ForumConfig
from .role_service import Privilege

__all__ = ["ConfigKey", "ForumConfig", "Privilege"]
