"""Relaybot entrypoint: wires everything together."""

import logging
import sys

from telegram import Update
from telegram.ext import Application, ApplicationBuilder, ContextTypes, TypeHandler

from relaybot.config import ConfigError, load_config, load_settings
from relaybot.handlers.relay import RelayDispatcher
from relaybot.logging_setup import LOG_FORMAT, configure_logging

logger = logging.getLogger(__name__)

POLL_TIMEOUT_S = 60


async def log_bot_identity(app: Application):
    me = await app.bot.get_me()
    logger.info("Authorized on account @%s", me.username)


async def log_error(update: object, context: ContextTypes.DEFAULT_TYPE):
    logger.error("Unhandled error while processing %s", update, exc_info=context.error)


def build_application(dispatcher: RelayDispatcher) -> Application:
    app = (
        ApplicationBuilder()
        .token(dispatcher.config.bot_token)
        .concurrent_updates(False)
        .post_init(log_bot_identity)
        .build()
    )
    app.add_handler(TypeHandler(Update, dispatcher))
    app.add_error_handler(log_error)
    return app


def main():
    try:
        settings = load_settings()
        configure_logging(settings)
        config = load_config(settings)
    except ConfigError as e:
        if not logging.getLogger().handlers:
            logging.basicConfig(format=LOG_FORMAT, level=logging.INFO)
        logger.error("Startup failed: %s", e)
        sys.exit(1)

    logger.info(
        "Starting relaybot (recipients=%d, sender_chat_id=%s, ack_target=%s)",
        len(config.recipients),
        config.sender_chat_id,
        config.ack_target,
    )

    app = build_application(RelayDispatcher(config))

    logger.info("Bot is ready, polling for updates")
    app.run_polling(allowed_updates=["message"], timeout=POLL_TIMEOUT_S)


if __name__ == "__main__":
    main()
