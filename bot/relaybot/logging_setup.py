"""Console and rotating-file logging for the bot process."""

import logging
import sys
from logging.handlers import RotatingFileHandler

from relaybot.config import ConfigError, Settings

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Install stdout and log-file handlers on the root logger.

    Raises ConfigError if the level is unknown or the log file can't be opened.
    """
    root = logging.getLogger()
    try:
        root.setLevel(settings.log_level.upper())
    except ValueError as e:
        raise ConfigError(f"Invalid LOG_LEVEL: {settings.log_level}") from e

    try:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.log_file,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        raise ConfigError(f"Cannot open log file {settings.log_file}: {e}") from e

    formatter = logging.Formatter(LOG_FORMAT)
    stream_handler = logging.StreamHandler(sys.stdout)
    for handler in (file_handler, stream_handler):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # Every long-poll request is logged by httpx at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
