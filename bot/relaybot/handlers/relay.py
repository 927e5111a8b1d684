"""Relay handler: answers commands, forwards text and photos to the admins."""

import logging
from dataclasses import dataclass, field

from telegram import Bot, Update
from telegram.constants import MessageLimit
from telegram.ext import ContextTypes

from relaybot.config import RelayConfig
from relaybot.outbound import OutboundMessage, SendOutcome, broadcast, try_send
from relaybot.updates import (
    CommandUpdate,
    PhotoUpdate,
    Sender,
    TextUpdate,
    Unclassified,
    classify,
)

logger = logging.getLogger(__name__)

ACK_TEXT = "Your message has been sent, thank you!"
TRUNCATION_MARK = "…"


@dataclass
class DispatchResult:
    """What one update turned into: its kind and every send issued for it."""

    kind: str
    sends: list[SendOutcome] = field(default_factory=list)


def fit_to_limit(text: str, limit: int) -> str:
    """Cut text to Telegram's length limit, marking the cut."""
    if len(text) <= limit:
        return text
    logger.warning("Forward is %d characters, truncating to %d", len(text), limit)
    return text[: limit - len(TRUNCATION_MARK)] + TRUNCATION_MARK


def text_forward_body(sender: Sender, text: str) -> str:
    return fit_to_limit(f"Text from {sender.handle}\n\n{text}", MessageLimit.MAX_TEXT_LENGTH)


def photo_forward_caption(sender: Sender, caption: str) -> str:
    # The attribution line counts against the caption limit.
    return fit_to_limit(f"Image from {sender.handle}\n\n{caption}", MessageLimit.CAPTION_LENGTH)


class RelayDispatcher:
    """Routes each update to exactly one handler.

    Register an instance with a ``TypeHandler(Update, dispatcher)``; the
    application must process updates sequentially.
    """

    def __init__(self, config: RelayConfig):
        self.config = config

    async def __call__(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await self.dispatch(context.bot, update)

    async def dispatch(self, bot: Bot, update: Update) -> DispatchResult:
        inbound = classify(update)

        match inbound:
            case CommandUpdate():
                sends = [await self.handle_command(bot, inbound)]
            case PhotoUpdate():
                sends = await self.handle_photo(bot, inbound)
            case TextUpdate():
                sends = await self.handle_text(bot, inbound)
            case Unclassified(reason=reason):
                logger.debug("Ignoring update %s: %s", update.update_id, reason)
                return DispatchResult(kind="unclassified")

        return DispatchResult(kind=type(inbound).__name__, sends=sends)

    async def handle_command(self, bot: Bot, inbound: CommandUpdate) -> SendOutcome:
        """Reply to the issuing chat from the response table. Nothing is relayed."""
        reply = self.config.responses.reply_for(inbound.command)
        logger.info("Command /%s from %s", inbound.command, inbound.sender.handle)
        return await try_send(bot, OutboundMessage(inbound.sender.chat_id, reply))

    async def handle_text(self, bot: Bot, inbound: TextUpdate) -> list[SendOutcome]:
        body = text_forward_body(inbound.sender, inbound.text)
        return await self.forward(
            bot,
            inbound.sender,
            [OutboundMessage(chat_id, body) for chat_id in self.config.recipients],
        )

    async def handle_photo(self, bot: Bot, inbound: PhotoUpdate) -> list[SendOutcome]:
        caption = photo_forward_caption(inbound.sender, inbound.caption)
        return await self.forward(
            bot,
            inbound.sender,
            [
                OutboundMessage(chat_id, caption, photo=inbound.file_id)
                for chat_id in self.config.recipients
            ],
        )

    async def forward(
        self, bot: Bot, sender: Sender, messages: list[OutboundMessage]
    ) -> list[SendOutcome]:
        """Fan out to every recipient, then acknowledge the sender once."""
        outcomes = await broadcast(bot, messages)
        failed = sum(1 for outcome in outcomes if not outcome.ok)
        if failed:
            logger.warning(
                "Forward from %s failed for %d of %d recipients",
                sender.handle,
                failed,
                len(outcomes),
            )

        ack = await self.acknowledge(bot, sender)
        if ack is not None:
            outcomes.append(ack)
        return outcomes

    def ack_chat_id(self, sender: Sender) -> int:
        if self.config.ack_target == "user":
            return sender.user_id
        return sender.chat_id

    async def acknowledge(self, bot: Bot, sender: Sender) -> SendOutcome | None:
        """Confirm receipt to the sender unless they are the sender-chat sentinel."""
        chat_id = self.ack_chat_id(sender)
        if chat_id == self.config.sender_chat_id:
            logger.debug("Skipping acknowledgement to sender chat %s", chat_id)
            return None
        return await try_send(bot, OutboundMessage(chat_id, ACK_TEXT))
