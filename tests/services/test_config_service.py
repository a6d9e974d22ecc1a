# tests/services/test_config_service.py
"""Tests for the settings overlay and schema bootstrap."""

import logging

from sqlalchemy.orm import Session

from orange_forum.services import config_service
from orange_forum.services.config_service import ConfigKey, ForumConfig


def test_unknown_key_reads_as_zero(db_session: Session) -> None:
    assert config_service.read_config(db_session, "no_such_key") == "0"


def test_migration_needed_on_fresh_store(engine) -> None:
    assert config_service.is_migration_needed(engine) is True


def test_migrate_seeds_defaults(engine, db_session: Session) -> None:
    config_service.migrate(engine)

    assert config_service.is_migration_needed(engine) is False
    assert config_service.read_config(db_session, "version") == "1"
    assert config_service.read_config(db_session, ConfigKey.FORUM_NAME) == "Orange Forum"
    assert config_service.read_config(db_session, ConfigKey.SMTP_PORT) == "25"
    assert config_service.read_config(db_session, ConfigKey.SIGNUP_DISABLED) == "0"


def test_second_migrate_keeps_settings(engine, db_session: Session, caplog) -> None:
    config_service.migrate(engine)
    config_service.write_config(db_session, ConfigKey.FORUM_NAME, "Gophers Anonymous")

    with caplog.at_level(logging.WARNING, logger="orange_forum.services.config_service"):
        config_service.migrate(engine)

    assert "already at version" in caplog.text
    assert config_service.read_config(db_session, ConfigKey.FORUM_NAME) == "Gophers Anonymous"


def test_write_config_replaces_value(db_session: Session) -> None:
    config_service.write_config(db_session, ConfigKey.HEADER_MSG, "first")
    config_service.write_config(db_session, ConfigKey.HEADER_MSG, "second")
    assert config_service.read_config(db_session, ConfigKey.HEADER_MSG) == "second"


def test_write_configs_in_one_go(db_session: Session) -> None:
    config_service.write_configs(db_session, {
        ConfigKey.SMTP_HOST: "mail.example.com",
        ConfigKey.ALLOW_TOPIC_SUBSCRIPTION: "1",
    })
    config = config_service.load_forum_config(db_session)
    assert config.smtp_host == "mail.example.com"
    assert config.allow_topic_subscription is True
    assert config.allow_group_subscription is False


def test_config_all_vals_decodes_flags(seeded_db: Session) -> None:
    vals = config_service.config_all_vals(seeded_db)
    assert set(vals) == {key.value for key in ConfigKey}
    assert vals["signup_disabled"] is False
    assert vals["smtp_port"] == "25"
    assert vals["default_from_mail"] == "admin@example.com"


def test_config_common_vals(seeded_db: Session) -> None:
    assert config_service.config_common_vals(seeded_db) == {"forum_name": "Orange Forum"}


def test_forum_config_from_sparse_values() -> None:
    config = ForumConfig.from_values({"signup_disabled": "1", "smtp_port": "oops"})
    assert config.signup_disabled is True
    assert config.group_creation_disabled is False
    assert config.forum_name == "0"
    assert config.smtp_port == 25


def test_only_one_counts_as_true() -> None:
    assert config_service.decode_flag("1") is True
    assert config_service.decode_flag("true") is False
    assert config_service.encode_flag(True) == "1"
    assert config_service.encode_flag(False) == "0"


def test_defaults_snapshot() -> None:
    config = ForumConfig.defaults()
    assert config.forum_name == "Orange Forum"
    assert config.smtp_port == 25
    assert config.allow_topic_subscription is False
