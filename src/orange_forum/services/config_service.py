# src/orange_forum/services/config_service.py
"""Forum settings overlay stored in the ``configs`` table.

Reads return ``"0"`` for unknown keys, so boolean flags default to off and
callers must not use :func:`read_config` to test whether a key exists.
Components that need flags receive a :class:`ForumConfig` snapshot loaded
once (at startup, and again after an admin edits settings) instead of
querying the table on every call.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from orange_forum.db.session import best_effort, create_tables, guard_store, unit_of_work
from orange_forum.models import Config

logger = logging.getLogger(__name__)

MODEL_VERSION = 1
VERSION_KEY = "version"
MISSING_VALUE = "0"


class ConfigKey(enum.StrEnum):
    """Externally visible forum settings."""

    FORUM_NAME = "forum_name"
    HEADER_MSG = "header_msg"
    SIGNUP_DISABLED = "signup_disabled"
    GROUP_CREATION_DISABLED = "group_creation_disabled"
    IMAGE_UPLOAD_ENABLED = "image_upload_enabled"
    FILE_UPLOAD_ENABLED = "file_upload_enabled"
    ALLOW_GROUP_SUBSCRIPTION = "allow_group_subscription"
    ALLOW_TOPIC_SUBSCRIPTION = "allow_topic_subscription"
    DATA_DIR = "data_dir"
    DEFAULT_FROM_MAIL = "default_from_mail"
    SMTP_HOST = "smtp_host"
    SMTP_PORT = "smtp_port"
    SMTP_USER = "smtp_user"
    SMTP_PASS = "smtp_pass"


BOOLEAN_KEYS = frozenset({
    ConfigKey.SIGNUP_DISABLED,
    ConfigKey.GROUP_CREATION_DISABLED,
    ConfigKey.IMAGE_UPLOAD_ENABLED,
    ConfigKey.FILE_UPLOAD_ENABLED,
    ConfigKey.ALLOW_GROUP_SUBSCRIPTION,
    ConfigKey.ALLOW_TOPIC_SUBSCRIPTION,
})

DEFAULT_CONFIG: dict[ConfigKey, str] = {
    ConfigKey.HEADER_MSG: "",
    ConfigKey.FORUM_NAME: "Orange Forum",
    ConfigKey.SIGNUP_DISABLED: "0",
    ConfigKey.GROUP_CREATION_DISABLED: "0",
    ConfigKey.FILE_UPLOAD_ENABLED: "0",
    ConfigKey.IMAGE_UPLOAD_ENABLED: "0",
    ConfigKey.ALLOW_GROUP_SUBSCRIPTION: "0",
    ConfigKey.ALLOW_TOPIC_SUBSCRIPTION: "0",
    ConfigKey.DATA_DIR: "",
    ConfigKey.DEFAULT_FROM_MAIL: "admin@example.com",
    ConfigKey.SMTP_HOST: "",
    ConfigKey.SMTP_PORT: "25",
    ConfigKey.SMTP_USER: "",
    ConfigKey.SMTP_PASS: "",
}


def encode_flag(value: bool) -> str:
    """Encode a boolean flag the way it is stored."""
    return "1" if value else "0"


def decode_flag(value: str) -> bool:
    """Decode a stored flag; anything but ``"1"`` is off."""
    return value == "1"


@dataclass(frozen=True, slots=True)
class ForumConfig:
    """Immutable typed snapshot of every forum setting."""

    forum_name: str
    header_msg: str
    signup_disabled: bool
    group_creation_disabled: bool
    image_upload_enabled: bool
    file_upload_enabled: bool
    allow_group_subscription: bool
    allow_topic_subscription: bool
    data_dir: str
    default_from_mail: str
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_pass: str

    @classmethod
    def from_values(cls, values: Mapping[str, str]) -> ForumConfig:
        """Build a snapshot from raw stored strings; missing keys read as ``"0"``."""

        def raw(key: ConfigKey) -> str:
            return values.get(key.value, MISSING_VALUE)

        try:
            smtp_port = int(raw(ConfigKey.SMTP_PORT))
        except ValueError:
            logger.warning("Ignoring non-numeric smtp_port %r", raw(ConfigKey.SMTP_PORT))
            smtp_port = int(DEFAULT_CONFIG[ConfigKey.SMTP_PORT])

        return cls(
            forum_name=raw(ConfigKey.FORUM_NAME),
            header_msg=raw(ConfigKey.HEADER_MSG),
            signup_disabled=decode_flag(raw(ConfigKey.SIGNUP_DISABLED)),
            group_creation_disabled=decode_flag(raw(ConfigKey.GROUP_CREATION_DISABLED)),
            image_upload_enabled=decode_flag(raw(ConfigKey.IMAGE_UPLOAD_ENABLED)),
            file_upload_enabled=decode_flag(raw(ConfigKey.FILE_UPLOAD_ENABLED)),
            allow_group_subscription=decode_flag(raw(ConfigKey.ALLOW_GROUP_SUBSCRIPTION)),
            allow_topic_subscription=decode_flag(raw(ConfigKey.ALLOW_TOPIC_SUBSCRIPTION)),
            data_dir=raw(ConfigKey.DATA_DIR),
            default_from_mail=raw(ConfigKey.DEFAULT_FROM_MAIL),
            smtp_host=raw(ConfigKey.SMTP_HOST),
            smtp_port=smtp_port,
            smtp_user=raw(ConfigKey.SMTP_USER),
            smtp_pass=raw(ConfigKey.SMTP_PASS),
        )

    @classmethod
    def defaults(cls) -> ForumConfig:
        """Return the snapshot of a freshly migrated forum."""
        return cls.from_values({key.value: val for key, val in DEFAULT_CONFIG.items()})


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@best_effort(MISSING_VALUE)
def read_config(db: Session, key: str) -> str:
    """Return the stored value for ``key`` or ``"0"`` if absent."""
    row = db.get(Config, str(key))
    if row is None:
        return MISSING_VALUE
    return row.val


@best_effort({})
def _read_all_raw(db: Session) -> dict[str, str]:
    rows = db.scalars(select(Config)).all()
    return {row.key: row.val for row in rows}


def load_forum_config(db: Session) -> ForumConfig:
    """Load a :class:`ForumConfig` snapshot from the store."""
    return ForumConfig.from_values(_read_all_raw(db))


def config_all_vals(db: Session) -> dict[str, Any]:
    """Return every externally visible setting, flags decoded to bool."""
    raw = _read_all_raw(db)
    vals: dict[str, Any] = {}
    for key in ConfigKey:
        value = raw.get(key.value, MISSING_VALUE)
        vals[key.value] = decode_flag(value) if key in BOOLEAN_KEYS else value
    return vals


def config_common_vals(db: Session) -> dict[str, str]:
    """Return the settings every page needs."""
    return {ConfigKey.FORUM_NAME.value: read_config(db, ConfigKey.FORUM_NAME)}


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def _upsert(db: Session, key: str, val: str) -> None:
    row = db.get(Config, key)
    if row is None:
        db.add(Config(key=key, val=val))
    else:
        row.val = val


@guard_store
def write_config(db: Session, key: str, val: str) -> None:
    """Insert or replace a single setting. No validation of ``val``."""
    with unit_of_work(db):
        _upsert(db, str(key), val)


@guard_store
def write_configs(db: Session, values: Mapping[str, str]) -> None:
    """Insert or replace several settings in one transaction."""
    with unit_of_work(db):
        for key, val in values.items():
            _upsert(db, str(key), val)
    logger.info("Updated %d forum settings", len(values))


# ---------------------------------------------------------------------------
# Schema bootstrap
# ---------------------------------------------------------------------------

def stored_model_version(db: Session) -> int:
    """Return the schema version marker, 0 when missing or unreadable."""
    try:
        return int(read_config(db, VERSION_KEY))
    except ValueError:
        return 0


def is_migration_needed(bind: Engine) -> bool:
    """Return True when the store's schema marker differs from :data:`MODEL_VERSION`."""
    with Session(bind) as db:
        return stored_model_version(db) != MODEL_VERSION


@guard_store
def _seed_defaults(db: Session) -> None:
    with unit_of_work(db):
        _upsert(db, VERSION_KEY, str(MODEL_VERSION))
        for key, val in DEFAULT_CONFIG.items():
            _upsert(db, key.value, val)


def migrate(bind: Engine) -> None:
    """Create the schema on a fresh install and seed default settings.

    Running it against an already migrated store logs a warning and leaves
    existing settings alone.
    """
    if not is_migration_needed(bind):
        logger.warning("Schema already at version %d; skipping migration", MODEL_VERSION)
        return

    create_tables(bind)
    with Session(bind) as db:
        _seed_defaults(db)
    logger.info("Migrated forum schema to version %d", MODEL_VERSION)
