"""Tests for log handler setup."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from relaybot.config import ConfigError, Settings
from relaybot.logging_setup import configure_logging


def make_settings(**overrides):
    return Settings(_env_file=None, bot_token="t", admin_ids="1", **overrides)


def test_writes_to_rotating_file(tmp_path, root_logger):
    log_file = tmp_path / "logs" / "relaybot.log"
    configure_logging(
        make_settings(log_file=log_file, log_max_bytes=2048, log_backup_count=2)
    )

    file_handlers = [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 2048
    assert file_handlers[0].backupCount == 2

    logging.getLogger("relaybot.test").info("Sent message to chat ID 111")
    file_handlers[0].flush()
    assert "Sent message to chat ID 111" in log_file.read_text()


def test_unwritable_log_path_is_config_error(tmp_path, root_logger):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    with pytest.raises(ConfigError):
        configure_logging(make_settings(log_file=blocker / "relaybot.log"))


def test_invalid_level_is_config_error(tmp_path, root_logger):
    with pytest.raises(ConfigError, match="LOG_LEVEL"):
        configure_logging(make_settings(log_file=tmp_path / "x.log", log_level="LOUD"))
