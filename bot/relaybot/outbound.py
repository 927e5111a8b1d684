"""Outbound sends: one call site for the transport, and best-effort broadcast."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from telegram import Bot
from telegram.error import TelegramError

logger = logging.getLogger(__name__)


class SendError(Exception):
    """A single outbound send failed. Recoverable."""

    def __init__(self, chat_id: int, kind: str, cause: Exception):
        super().__init__(f"Failed to send {kind} to chat {chat_id}: {cause}")
        self.chat_id = chat_id
        self.kind = kind
        self.cause = cause


@dataclass(frozen=True)
class OutboundMessage:
    """A text message, or a photo share when ``photo`` holds a file id."""

    chat_id: int
    text: str
    photo: str | None = None

    @property
    def kind(self) -> str:
        return "photo" if self.photo else "message"


@dataclass(frozen=True)
class SendOutcome:
    chat_id: int
    ok: bool
    error: SendError | None = None


async def send(bot: Bot, message: OutboundMessage) -> None:
    """Hand one message to Telegram. Raises SendError on any transport failure."""
    try:
        if message.photo:
            await bot.send_photo(
                chat_id=message.chat_id, photo=message.photo, caption=message.text
            )
        else:
            await bot.send_message(chat_id=message.chat_id, text=message.text)
    except TelegramError as e:
        raise SendError(message.chat_id, message.kind, e) from e


async def try_send(bot: Bot, message: OutboundMessage) -> SendOutcome:
    """Send and log the result. Never raises."""
    try:
        await send(bot, message)
    except SendError as e:
        logger.error("Error sending %s to chat ID %s: %s", e.kind, e.chat_id, e.cause)
        return SendOutcome(chat_id=message.chat_id, ok=False, error=e)

    logger.info("Sent %s to chat ID %s", message.kind, message.chat_id)
    return SendOutcome(chat_id=message.chat_id, ok=True)


async def broadcast(bot: Bot, messages: Iterable[OutboundMessage]) -> list[SendOutcome]:
    """Send each message in order; a failure never stops the rest."""
    return [await try_send(bot, message) for message in messages]
