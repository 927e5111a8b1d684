"""Shared test fixtures."""

import logging
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import Chat, Message, MessageEntity, PhotoSize, Update, User

from relaybot.config import RelayConfig
from relaybot.responses import ResponseTable


@pytest.fixture
def recipients():
    return (111, 222)


@pytest.fixture
def responses():
    return ResponseTable({"start": "Welcome!", "info": "About this bot."})


@pytest.fixture
def relay_config(recipients, responses):
    return RelayConfig(
        bot_token="123456:test-token",
        recipients=recipients,
        responses=responses,
        sender_chat_id=0,
    )


@pytest.fixture
def bot():
    """Mock bot whose sends succeed unless a test sets a side_effect."""
    bot = MagicMock()
    bot.send_message = AsyncMock()
    bot.send_photo = AsyncMock()
    return bot


@pytest.fixture
def make_update():
    """Factory for real Telegram updates, built without a network bot."""

    def _make(
        text: str | None = None,
        photo_ids: list[str] | None = None,
        caption: str | None = None,
        user_id: int = 42,
        chat_id: int = 42,
        username: str | None = "alice",
    ):
        entities = []
        if text and text.startswith("/"):
            length = len(text.split(" ", 1)[0])
            entities.append(
                MessageEntity(type=MessageEntity.BOT_COMMAND, offset=0, length=length)
            )

        photo = [
            PhotoSize(
                file_id=file_id,
                file_unique_id=f"u-{file_id}",
                width=90 * (i + 1),
                height=90 * (i + 1),
            )
            for i, file_id in enumerate(photo_ids or [])
        ]

        message = Message(
            message_id=1,
            date=datetime.now(timezone.utc),
            chat=Chat(id=chat_id, type=Chat.PRIVATE),
            from_user=User(id=user_id, first_name="Alice", is_bot=False, username=username),
            text=text,
            entities=entities,
            photo=photo,
            caption=caption,
        )
        return Update(update_id=1, message=message)

    return _make


@pytest.fixture
def root_logger():
    """Restore root logger handlers and level after a test configures logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
