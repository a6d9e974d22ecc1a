"""Group roles and the privilege hierarchy.

Privilege, highest first: site super admin, group admin, group mod, author
of the item being changed, anyone else. Super admin is a flag on the user
row; admin and mod are per-group rows in ``admins`` and ``mods``.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from orange_forum.core.errors import PermissionDeniedError, UserNotFoundError
from orange_forum.db.session import guard_store, unit_of_work
from orange_forum.db.time import now_epoch
from orange_forum.models import Admin, Mod, User
from orange_forum.services.user_service import read_user_id_by_name

logger = logging.getLogger(__name__)


class Privilege(enum.IntEnum):
    """Caller privilege relative to one item, ordered weakest to strongest."""

    ANONYMOUS = 0
    AUTHOR = 1
    GROUP_MOD = 2
    GROUP_ADMIN = 3
    SUPER_ADMIN = 4


def _add_role(db: Session, model: type[Mod] | type[Admin], username: str, group_id: int) -> None:
    try:
        user_id = read_user_id_by_name(db, username)
    except UserNotFoundError:
        logger.debug("Ignoring %s grant for unknown user %s", model.__tablename__, username)
        return
    exists = db.scalar(
        select(model.id).where(model.user_id == user_id, model.group_id == group_id)
    )
    if exists is None:
        db.add(model(user_id=user_id, group_id=group_id, created_date=now_epoch()))
        db.flush()


def _grant(db: Session, model: type[Mod] | type[Admin], username: str, group_id: int) -> None:
    with unit_of_work(db):
        _add_role(db, model, username, group_id)


def _read_usernames(db: Session, model: type[Mod] | type[Admin], group_id: int) -> list[str]:
    stmt = (
        select(User.username)
        .join(model, User.id == model.user_id)
        .where(model.group_id == group_id)
    )
    return list(db.scalars(stmt))


def _clear(db: Session, model: type[Mod] | type[Admin], group_id: int) -> int:
    with unit_of_work(db):
        result = db.execute(delete(model).where(model.group_id == group_id))
    return result.rowcount or 0


@guard_store
def create_mod(db: Session, username: str, group_id: int) -> None:
    """Make ``username`` a moderator of the group. Unknown users are ignored."""
    _grant(db, Mod, username, group_id)


@guard_store
def create_admin(db: Session, username: str, group_id: int) -> None:
    """Make ``username`` an admin of the group. Unknown users are ignored."""
    _grant(db, Admin, username, group_id)


@guard_store
def read_mods(db: Session, group_id: int) -> list[str]:
    return _read_usernames(db, Mod, group_id)


@guard_store
def read_admins(db: Session, group_id: int) -> list[str]:
    return _read_usernames(db, Admin, group_id)


@guard_store
def delete_mods(db: Session, group_id: int) -> int:
    """Remove every moderator row of the group; returns the number removed."""
    removed = _clear(db, Mod, group_id)
    logger.info("Cleared %d mods from group %s", removed, group_id)
    return removed


@guard_store
def delete_admins(db: Session, group_id: int) -> int:
    """Remove every admin row of the group; returns the number removed."""
    removed = _clear(db, Admin, group_id)
    logger.info("Cleared %d admins from group %s", removed, group_id)
    return removed


@guard_store
def replace_roles(
    db: Session, group_id: int, admins: Iterable[str], mods: Iterable[str]
) -> None:
    """Swap the group's admin and mod lists in one transaction.

    Unknown usernames are skipped. On failure the previous lists stay intact.
    """
    with unit_of_work(db):
        db.execute(delete(Admin).where(Admin.group_id == group_id))
        db.execute(delete(Mod).where(Mod.group_id == group_id))
        for username in admins:
            _add_role(db, Admin, username, group_id)
        for username in mods:
            _add_role(db, Mod, username, group_id)
    logger.info("Replaced roles of group %s", group_id)


@guard_store
def is_group_admin(db: Session, user_id: int | None, group_id: int) -> bool:
    if user_id is None:
        return False
    found = db.scalar(
        select(Admin.id).where(Admin.user_id == user_id, Admin.group_id == group_id)
    )
    return found is not None


@guard_store
def is_group_mod(db: Session, user_id: int | None, group_id: int) -> bool:
    if user_id is None:
        return False
    found = db.scalar(
        select(Mod.id).where(Mod.user_id == user_id, Mod.group_id == group_id)
    )
    return found is not None


def resolve_privilege(
    db: Session,
    user: User | None,
    group_id: int | None,
    author_id: int | None = None,
) -> Privilege:
    """Return the strongest privilege ``user`` holds over an item.

    Args:
        db: Database session.
        user: The caller, or None when anonymous.
        group_id: Group the item lives in, or None for site-level items.
        author_id: Author of the item, when the item has one.
    """
    if user is None:
        return Privilege.ANONYMOUS
    if user.is_superadmin:
        return Privilege.SUPER_ADMIN
    if group_id is not None:
        if is_group_admin(db, user.id, group_id):
            return Privilege.GROUP_ADMIN
        if is_group_mod(db, user.id, group_id):
            return Privilege.GROUP_MOD
    if author_id is not None and author_id == user.id:
        return Privilege.AUTHOR
    return Privilege.ANONYMOUS


def require_privilege(
    db: Session,
    user: User | None,
    needed: Privilege,
    *,
    group_id: int | None = None,
    author_id: int | None = None,
) -> Privilege:
    """Return the caller's privilege or raise :class:`PermissionDeniedError`."""
    held = resolve_privilege(db, user, group_id, author_id)
    if held < needed:
        raise PermissionDeniedError()
    return held
