"""Configuration loader using pydantic-settings."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from relaybot.responses import ResponseTable, load_responses

CHAT_ID_PATTERN = re.compile(r"-?[0-9]+")


class ConfigError(Exception):
    """Raised when the bot cannot be configured. Fatal at startup."""


class Settings(BaseSettings):
    """Bot configuration loaded from environment variables."""

    bot_token: str
    # Comma-separated chat ids, parsed by parse_recipients().
    admin_ids: str

    # The bot's own broadcast chat; never acknowledged.
    sender_chat_id: int = 0
    # Which sender identity receives the acknowledgement.
    ack_target: Literal["chat", "user"] = "chat"
    responses_path: Path = Path("responses/responses.json")

    log_file: Path = Path("logs/relaybot.log")
    log_level: str = "INFO"
    log_max_bytes: int = 1024 * 1024
    log_backup_count: int = 5

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@dataclass(frozen=True)
class RelayConfig:
    """Everything the dispatcher needs, fixed for the process lifetime."""

    bot_token: str
    recipients: tuple[int, ...]
    responses: ResponseTable
    sender_chat_id: int = 0
    ack_target: str = "chat"


def parse_recipients(raw: str) -> tuple[int, ...]:
    """Parse ``"111, 222"`` into ``(111, 222)``.

    Order and duplicates are kept. Raises ConfigError on an empty list or
    on any element that is not a plain ASCII integer.
    """
    if not raw or not raw.strip():
        raise ConfigError("ADMIN_IDS is empty")

    recipients = []
    for part in raw.split(","):
        part = part.strip()
        if not CHAT_ID_PATTERN.fullmatch(part):
            raise ConfigError(f"Invalid chat id in ADMIN_IDS: {part!r}")
        recipients.append(int(part))
    return tuple(recipients)


def load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(settings: Settings | None = None) -> RelayConfig:
    """Build the immutable relay configuration.

    Reads the environment (and ``.env``) unless settings are passed in,
    then loads the response table from ``settings.responses_path``.
    """
    if settings is None:
        settings = load_settings()

    token = settings.bot_token.strip()
    if not token:
        raise ConfigError("BOT_TOKEN is empty")

    recipients = parse_recipients(settings.admin_ids)

    try:
        responses = load_responses(settings.responses_path)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot load responses from {settings.responses_path}: {e}") from e

    return RelayConfig(
        bot_token=token,
        recipients=recipients,
        responses=responses,
        sender_chat_id=settings.sender_chat_id,
        ack_target=settings.ack_target,
    )
