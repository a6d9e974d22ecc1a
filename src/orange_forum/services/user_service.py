"""Identity and credential operations for forum users."""
from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from orange_forum.core import security
from orange_forum.core.errors import (
    IncorrectPasswordError,
    InvalidOrExpiredTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationFailureError,
)
from orange_forum.core.settings import settings
from orange_forum.db.session import best_effort, guard_store, unit_of_work
from orange_forum.db.time import now_epoch
from orange_forum.models import User

logger = logging.getLogger(__name__)

__all__ = [
    "create_user",
    "create_super_user",
    "verify_credentials",
    "read_user",
    "read_user_by_id",
    "read_user_id_by_name",
    "read_user_about",
    "read_user_karma",
    "read_user_email",
    "read_user_name_by_token",
    "probe_user",
    "update_user_passwd",
    "update_user_profile",
    "create_reset_token",
    "ban_user",
    "unban_user",
]


def _get_by_name(db: Session, username: str) -> User | None:
    return db.scalars(select(User).where(User.username == username)).first()


def _create_user(
    db: Session,
    username: str,
    password: str,
    email: str,
    is_superadmin: bool,
) -> User:
    if not username:
        raise ValidationFailureError("Username cannot be empty.")
    if not password:
        raise ValidationFailureError("Password cannot be empty.")

    passwd_hash = security.hash_password(password)
    now = now_epoch()
    # The UNIQUE constraint on username backs the check under concurrent signups.
    with unit_of_work(db, conflict=UserAlreadyExistsError):
        if _get_by_name(db, username) is not None:
            raise UserAlreadyExistsError()
        user = User(
            username=username,
            passwd_hash=passwd_hash,
            email=email,
            is_superadmin=is_superadmin,
            created_date=now,
            updated_date=now,
        )
        db.add(user)
        db.flush()
    logger.info("Created %suser %s", "super " if is_superadmin else "", username)
    return user


@guard_store
def create_user(db: Session, username: str, password: str, email: str = "") -> User:
    """Register a regular user.

    Raises:
        UserAlreadyExistsError: If ``username`` is taken.
        ValidationFailureError: If the input is empty or cannot be hashed.
    """
    return _create_user(db, username, password, email, is_superadmin=False)


@guard_store
def create_super_user(db: Session, username: str, password: str) -> User:
    """Register a site-wide super admin (used by bootstrap tooling)."""
    return _create_user(db, username, password, "", is_superadmin=True)


@guard_store
def verify_credentials(db: Session, username: str, password: str) -> User:
    """Return the user if ``password`` matches.

    Raises:
        UserNotFoundError: If no such user exists.
        IncorrectPasswordError: If the password does not verify.
    """
    user = _get_by_name(db, username)
    if user is None:
        raise UserNotFoundError()
    if not security.verify_password(password, user.passwd_hash):
        raise IncorrectPasswordError()
    return user


@guard_store
def read_user(db: Session, username: str) -> User:
    """Return the user named ``username`` or raise :class:`UserNotFoundError`."""
    user = _get_by_name(db, username)
    if user is None:
        raise UserNotFoundError()
    return user


@guard_store
def read_user_by_id(db: Session, user_id: int) -> User:
    """Return the user with primary key ``user_id``."""
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError()
    return user


@guard_store
def read_user_id_by_name(db: Session, username: str) -> int:
    """Resolve a username to its id; raises :class:`UserNotFoundError`."""
    user_id = db.scalar(select(User.id).where(User.username == username))
    if user_id is None:
        raise UserNotFoundError("User not found.")
    return user_id


@guard_store
def probe_user(db: Session, username: str) -> bool:
    """Return True if ``username`` is registered."""
    return _get_by_name(db, username) is not None


@best_effort("")
def read_user_about(db: Session, username: str) -> str:
    about = db.scalar(select(User.about).where(User.username == username))
    return about or ""


@best_effort(0)
def read_user_karma(db: Session, username: str) -> int:
    karma = db.scalar(select(User.karma).where(User.username == username))
    return karma or 0


@best_effort("")
def read_user_email(db: Session, username: str) -> str:
    email = db.scalar(select(User.email).where(User.username == username))
    return email or ""


@guard_store
def update_user_passwd(db: Session, username: str, password: str) -> None:
    """Set a new password and invalidate any outstanding reset token."""
    if not password:
        raise ValidationFailureError("Password cannot be empty.")
    passwd_hash = security.hash_password(password)
    with unit_of_work(db):
        result = db.execute(
            update(User)
            .where(User.username == username)
            .values(
                passwd_hash=passwd_hash,
                reset_token="",
                reset_token_date=0,
                updated_date=now_epoch(),
            )
        )
        if result.rowcount == 0:
            raise UserNotFoundError()
    logger.info("Password updated for %s", username)


@guard_store
def update_user_profile(db: Session, username: str, email: str, about: str) -> None:
    """Replace the user's email and about text."""
    with unit_of_work(db):
        result = db.execute(
            update(User)
            .where(User.username == username)
            .values(email=email, about=about, updated_date=now_epoch())
        )
        if result.rowcount == 0:
            raise UserNotFoundError()


@guard_store
def create_reset_token(db: Session, username: str) -> str:
    """Issue a password-reset token for ``username`` and return it.

    The token stays valid for ``settings.reset_token_ttl_hours`` or until the
    password changes. Delivery is the caller's job.
    """
    token = security.generate_reset_token()
    with unit_of_work(db):
        result = db.execute(
            update(User)
            .where(User.username == username)
            .values(reset_token=token, reset_token_date=now_epoch())
        )
        if result.rowcount == 0:
            raise UserNotFoundError()
    logger.info("Issued reset token for %s", username)
    return token


@guard_store
def read_user_name_by_token(db: Session, reset_token: str, now: int | None = None) -> str:
    """Resolve a reset token to its owner.

    Raises:
        InvalidOrExpiredTokenError: If the token is empty, unknown, or was
            issued at least ``reset_token_ttl_hours`` before ``now``.
    """
    if not reset_token:
        raise InvalidOrExpiredTokenError()
    row = db.execute(
        select(User.username, User.reset_token_date).where(User.reset_token == reset_token)
    ).first()
    if row is None:
        raise InvalidOrExpiredTokenError()

    username, issued = row
    current = now_epoch() if now is None else now
    if issued <= current - settings.reset_token_ttl_seconds:
        raise InvalidOrExpiredTokenError()
    return username


def _set_banned(db: Session, username: str, banned: bool) -> None:
    with unit_of_work(db):
        result = db.execute(
            update(User)
            .where(User.username == username)
            .values(is_banned=banned, updated_date=now_epoch())
        )
        if result.rowcount == 0:
            raise UserNotFoundError()
    logger.info("%s user %s", "Banned" if banned else "Unbanned", username)


@guard_store
def ban_user(db: Session, username: str) -> None:
    _set_banned(db, username, True)


@guard_store
def unban_user(db: Session, username: str) -> None:
    _set_banned(db, username, False)
