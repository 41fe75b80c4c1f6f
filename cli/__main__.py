#!/usr/bin/env python3
"""
FinanceBot CLI - run the expense bot and inspect recorded spending.

Usage:
    python -m cli <command> [options]

Commands:
    run       Run the Telegram bot
    console   Chat with the bot from the terminal
    stats     Show recent spending

Examples:
    python -m cli run
    python -m cli console --user alice
    python -m cli stats --days 30
"""

import sys
import argparse
from cli import serve, stats
from config import load_config
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="FinanceBot - Telegram expense tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    serve.setup_parser(subparsers)
    stats.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            # Create services container for dependency injection
            services = Services(config)

            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
