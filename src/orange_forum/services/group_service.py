"""Group lifecycle: create, read, edit and soft-delete."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from orange_forum.core.errors import (
    GroupAlreadyExistsError,
    GroupNotFoundError,
    ValidationFailureError,
)
from orange_forum.db.session import guard_store, unit_of_work
from orange_forum.db.time import now_epoch
from orange_forum.models import Group

logger = logging.getLogger(__name__)


@guard_store
def create_group(db: Session, name: str, desc: str = "", header_msg: str = "") -> Group:
    """Create an open group.

    Raises:
        GroupAlreadyExistsError: If a group with ``name`` exists (open or closed).
        ValidationFailureError: If ``name`` is empty.
    """
    if not name:
        raise ValidationFailureError("Group name cannot be empty.")
    now = now_epoch()
    with unit_of_work(db, conflict=GroupAlreadyExistsError):
        if db.scalar(select(Group.id).where(Group.name == name)) is not None:
            raise GroupAlreadyExistsError()
        group = Group(
            name=name,
            description=desc,
            header_msg=header_msg,
            created_date=now,
            updated_date=now,
        )
        db.add(group)
        db.flush()
    logger.info("Created group %s (%d)", name, group.id)
    return group


@guard_store
def read_group(db: Session, group_id: int) -> Group:
    group = db.get(Group, group_id)
    if group is None:
        raise GroupNotFoundError()
    return group


@guard_store
def read_groups(db: Session, include_closed: bool = False) -> Sequence[Group]:
    """Return groups, sticky ones first, then alphabetically."""
    stmt = select(Group)
    if not include_closed:
        stmt = stmt.where(Group.is_closed.is_(False))
    stmt = stmt.order_by(Group.is_sticky.desc(), Group.name)
    return db.scalars(stmt).all()


@guard_store
def read_group_id_by_name(db: Session, name: str) -> int | None:
    return db.scalar(select(Group.id).where(Group.name == name))


def _read_column(db: Session, column, group_id: int, default):
    value = db.scalar(select(column).where(Group.id == group_id))
    return default if value is None else value


@guard_store
def read_group_name(db: Session, group_id: int) -> str:
    return _read_column(db, Group.name, group_id, "")


@guard_store
def read_group_desc(db: Session, group_id: int) -> str:
    return _read_column(db, Group.description, group_id, "")


@guard_store
def read_group_header_msg(db: Session, group_id: int) -> str:
    return _read_column(db, Group.header_msg, group_id, "")


@guard_store
def read_group_is_deleted(db: Session, group_id: int) -> bool:
    """Return True if the group is soft-deleted; False for unknown ids."""
    return _read_column(db, Group.is_closed, group_id, False)


def _update(db: Session, group_id: int, **values) -> None:
    with unit_of_work(db, conflict=GroupAlreadyExistsError):
        result = db.execute(
            update(Group).where(Group.id == group_id).values(updated_date=now_epoch(), **values)
        )
        if result.rowcount == 0:
            raise GroupNotFoundError()


@guard_store
def update_group(db: Session, group_id: int, name: str, desc: str, header_msg: str) -> None:
    if not name:
        raise ValidationFailureError("Group name cannot be empty.")
    _update(db, group_id, name=name, description=desc, header_msg=header_msg)


@guard_store
def delete_group(db: Session, group_id: int) -> None:
    """Soft-delete the group. Its topics are kept as they are."""
    _update(db, group_id, is_closed=True)
    logger.info("Closed group %s", group_id)


@guard_store
def undelete_group(db: Session, group_id: int) -> None:
    _update(db, group_id, is_closed=False)
    logger.info("Reopened group %s", group_id)


@guard_store
def set_group_sticky(db: Session, group_id: int, sticky: bool) -> None:
    _update(db, group_id, is_sticky=sticky)


@guard_store
def set_group_private(db: Session, group_id: int, private: bool) -> None:
    _update(db, group_id, is_private=private)
