"""Classify inbound Telegram updates into the shapes the relay handles."""

from dataclasses import dataclass

from telegram import Message, MessageEntity, Update


@dataclass(frozen=True)
class Sender:
    """Who sent a message and where from."""

    username: str
    user_id: int
    chat_id: int

    @property
    def handle(self) -> str:
        return f"@{self.username}"


@dataclass(frozen=True)
class CommandUpdate:
    sender: Sender
    command: str


@dataclass(frozen=True)
class PhotoUpdate:
    sender: Sender
    file_id: str  # largest size variant
    caption: str = ""


@dataclass(frozen=True)
class TextUpdate:
    sender: Sender
    text: str


@dataclass(frozen=True)
class Unclassified:
    reason: str


InboundUpdate = CommandUpdate | PhotoUpdate | TextUpdate | Unclassified


def sender_of(message: Message) -> Sender:
    """Build the sender identity, falling back to ids when no username is set."""
    chat_id = message.chat.id
    user = message.from_user
    user_id = user.id if user else chat_id
    username = user.username if user and user.username else str(user_id)
    return Sender(username=username, user_id=user_id, chat_id=chat_id)


def command_of(message: Message) -> str | None:
    """Return the bot command a message starts with, without '/' or '@botname'."""
    if not message.text or not message.entities:
        return None
    entity = message.entities[0]
    if entity.type != MessageEntity.BOT_COMMAND or entity.offset != 0:
        return None
    command = message.text[1 : entity.length]
    return command.split("@", 1)[0] or None


def classify(update: Update) -> InboundUpdate:
    """Reduce an update to exactly one of the relay's update kinds.

    Commands win over photos, photos over text. Anything else, including
    updates without a message, is Unclassified.
    """
    message = update.message
    if message is None:
        return Unclassified("no message")

    command = command_of(message)
    if command is not None:
        return CommandUpdate(sender=sender_of(message), command=command)

    if message.photo:
        # Telegram lists size variants smallest first.
        largest = message.photo[-1]
        return PhotoUpdate(
            sender=sender_of(message),
            file_id=largest.file_id,
            caption=message.caption or "",
        )

    if message.text:
        return TextUpdate(sender=sender_of(message), text=message.text)

    return Unclassified("unsupported content")
