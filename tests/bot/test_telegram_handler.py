"""Tests for the python-telegram-bot adapter."""

import asyncio
from datetime import datetime, timezone

import pytest
from telegram import Chat, Message, MessageEntity, Update, User
from telegram.error import NetworkError
from telegram.ext import MessageHandler

from bot.telegram_handler import (
    TelegramTransport,
    build_application,
    make_update_handler,
    to_inbound,
)
from errors import TransportSendError
from services.base import Services
from tests.helpers import FakeExtractor, FakeLedger


def make_update(text, username="alice", command_length=None, with_sender=True):
    entities = None
    if command_length is not None:
        entities = [MessageEntity(type=MessageEntity.BOT_COMMAND, offset=0, length=command_length)]
    user = User(id=42, first_name="Alice", is_bot=False, username=username) if with_sender else None
    message = Message(
        message_id=1,
        date=datetime(2024, 5, 15, tzinfo=timezone.utc),
        chat=Chat(id=1001, type=Chat.PRIVATE),
        from_user=user,
        text=text,
        entities=entities,
    )
    return Update(update_id=1, message=message)


class StubBot:
    def __init__(self, error=None):
        self.error = error
        self.sent = []

    async def send_message(self, chat_id, text):
        if self.error is not None:
            raise self.error
        self.sent.append((chat_id, text))


class TestToInbound:
    """Tests for to_inbound."""

    def test_plain_text(self):
        message = to_inbound(make_update("Lunch $12"))

        assert message.sender == "alice"
        assert message.chat_id == 1001
        assert message.text == "Lunch $12"
        assert not message.is_command

    def test_command_entity(self):
        message = to_inbound(make_update("/add Morning coffee $3.50", command_length=4))

        assert message.command == "add"
        assert message.command_args == "Morning coffee $3.50"

    def test_command_with_bot_name(self):
        message = to_inbound(make_update("/stats@FinanceBot", command_length=17))

        assert message.command == "stats"
        assert message.command_args == ""

    def test_slash_without_entity_is_text(self):
        """Test that only a bot_command entity marks a command."""
        message = to_inbound(make_update("/add lunch"))

        assert not message.is_command

    def test_missing_username(self):
        message = to_inbound(make_update("Lunch", username=None))

        assert message.sender == ""

    def test_missing_sender(self):
        message = to_inbound(make_update("Lunch", with_sender=False))

        assert message.sender is None

    def test_non_message_update(self):
        assert to_inbound(Update(update_id=2)) is None


class TestTelegramTransport:
    """Tests for TelegramTransport."""

    def test_send(self):
        bot = StubBot()

        asyncio.run(TelegramTransport(bot).send_text(1001, "hi"))

        assert bot.sent == [(1001, "hi")]

    def test_send_failure_wrapped(self):
        transport = TelegramTransport(StubBot(error=NetworkError("timed out")))

        with pytest.raises(TransportSendError, match="timed out"):
            asyncio.run(transport.send_text(1001, "hi"))


class TestUpdateHandler:
    """Tests for the handler callback."""

    def test_forwards_to_pipeline(self, pipeline, transport, extractor):
        handler = make_update_handler(pipeline)

        asyncio.run(handler(make_update("Lunch $12"), None))

        assert extractor.requests == ["Lunch $12"]
        assert len(transport.messages) == 1
        assert transport.chat_ids == [1001]

    def test_ignores_non_message_update(self, pipeline, transport):
        handler = make_update_handler(pipeline)

        asyncio.run(handler(Update(update_id=2), None))

        assert transport.messages == []


class TestBuildApplication:
    """Tests for build_application."""

    def test_registers_message_handler(self, test_config):
        services = Services(test_config, ledger=FakeLedger())

        application = build_application(test_config, services, FakeExtractor())

        handlers = [h for group in application.handlers.values() for h in group]
        assert len(handlers) == 1
        assert isinstance(handlers[0], MessageHandler)

    def test_post_shutdown_closes_ledger(self, test_config):
        ledger = FakeLedger()
        services = Services(test_config, ledger=ledger)

        application = build_application(test_config, services, FakeExtractor())
        asyncio.run(application.post_shutdown(application))

        assert ledger.close_calls == 1
