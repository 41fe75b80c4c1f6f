"""Telegram transport built on python-telegram-bot.

Updates are fetched by long polling and handled one at a time (the
Application default), so replies go out in the order messages arrived.
"""

from typing import Optional
from telegram import Bot, MessageEntity, Update
from telegram.error import TelegramError
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from auth import AccessPolicy
from bot.messages import InboundMessage, split_command
from bot.pipeline import Pipeline
from bot.transport import Transport
from config import Config
from errors import TransportSendError
from llm.providers.base import ExpenseExtractor
from logger import get_logger
from services.base import Services

logger = get_logger()


class TelegramTransport(Transport):
    """Sends plain-text replies through the Bot API."""

    def __init__(self, bot: Bot):
        self.bot = bot

    async def send_text(self, chat_id: int, text: str) -> None:
        try:
            await self.bot.send_message(chat_id=chat_id, text=text)
        except TelegramError as e:
            raise TransportSendError(str(e)) from e


def to_inbound(update: Update) -> Optional[InboundMessage]:
    """Convert a Telegram update into an InboundMessage.

    Only new messages are considered; edits and other update kinds yield None.
    A message is a command when it starts with a bot_command entity.
    """
    message = update.message
    if message is None:
        return None

    user = message.from_user
    sender = None if user is None else (user.username or "")
    text = message.text or ""

    entities = message.entities or ()
    if entities and entities[0].type == MessageEntity.BOT_COMMAND and entities[0].offset == 0:
        command, args = split_command(text, entities[0].length)
        return InboundMessage(sender, message.chat_id, text, command, args)

    return InboundMessage(sender, message.chat_id, text)


def make_update_handler(pipeline: Pipeline):
    """Wrap the pipeline as a python-telegram-bot handler callback."""

    async def handle_update(update: Update, context: ContextTypes.DEFAULT_TYPE):
        message = to_inbound(update)
        if message is None:
            return
        await pipeline.handle(message)

    return handle_update


def build_application(
    config: Config, services: Services, extractor: ExpenseExtractor
) -> Application:
    """Create the Telegram application wired to a pipeline.

    The ledger is closed once, by the post-shutdown hook, after polling stops.
    """

    async def close_services(application: Application) -> None:
        services.close()

    application = (
        Application.builder()
        .token(config.telegram_token)
        .post_shutdown(close_services)
        .build()
    )

    pipeline = Pipeline(
        transport=TelegramTransport(application.bot),
        policy=AccessPolicy.from_config(config),
        extractor=extractor,
        ledger=services.ledger,
    )

    application.add_handler(
        MessageHandler(filters.UpdateType.MESSAGE & filters.TEXT, make_update_handler(pipeline))
    )
    return application


def run_bot(config: Config, services: Services, extractor: ExpenseExtractor) -> None:
    """Long-poll Telegram until the process is interrupted."""
    application = build_application(config, services, extractor)
    logger.info(f"Bot is running. Authorized users: {', '.join(config.authorized_users)}")
    application.run_polling(allowed_updates=[Update.MESSAGE])
