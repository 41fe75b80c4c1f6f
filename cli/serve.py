#!/usr/bin/env python3

import asyncio
from auth import AccessPolicy
from bot.console import ConsoleTransport, read_messages
from bot.pipeline import Pipeline
from bot.telegram_handler import run_bot
from errors import ConfigError
from llm import get_extractor
from logger import get_logger

logger = get_logger()


def cmd_run(args, services):
    """Start the Telegram bot and poll until interrupted."""
    config = services.config
    try:
        config.require_credentials()
        extractor = get_extractor(config)
    except ConfigError:
        services.close()
        raise
    logger.info(f"Storage: {config.storage_path or 'in-memory'}")

    # The application's post-shutdown hook closes the ledger
    run_bot(config, services, extractor)


def cmd_console(args, services):
    """Feed stdin lines through the pipeline and print the replies."""
    config = services.config
    try:
        extractor = get_extractor(config)
    except ConfigError:
        services.close()
        raise

    sender = args.user or config.authorized_users[0]
    policy = AccessPolicy.from_config(config)
    if not policy.is_allowed(sender):
        logger.warning(f"{sender!r} is not an authorized user; messages will be ignored")

    pipeline = Pipeline(ConsoleTransport(), policy, extractor, services.ledger)

    logger.info("Type an expense or a command (/add, /stats). Ctrl-D to quit.")
    try:
        asyncio.run(pipeline.run(read_messages(sender)))
    finally:
        services.close()


def setup_parser(subparsers):
    """Setup run and console subcommand parsers.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    run_parser = subparsers.add_parser(
        "run",
        help="Run the Telegram bot",
        description="Long-poll Telegram and record expenses from chat messages",
    )
    run_parser.set_defaults(func=cmd_run)

    console_parser = subparsers.add_parser(
        "console",
        help="Chat with the bot from the terminal",
        description="Run the message pipeline over stdin/stdout",
    )
    console_parser.add_argument(
        "--user",
        help="Sender username to act as (default: first authorized user)",
    )
    console_parser.set_defaults(func=cmd_console)
