#!/usr/bin/env python3

from datetime import timedelta
from bot.replies import format_summary
from logger import get_logger
from services.ledger import utc_now

logger = get_logger()


def cmd_stats(args, services):
    """Print the spending summary for the last N days."""
    since = utc_now() - timedelta(days=args.days)

    try:
        summary = services.ledger.aggregate(since)
    finally:
        services.close()

    if summary.total_count == 0:
        logger.info(f"No expenses recorded in the last {args.days} days.")
        return

    logger.info(format_summary(summary, since, args.days))


def setup_parser(subparsers):
    """Setup stats subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "stats",
        help="Show recent spending",
        description="Summarize stored expenses over a rolling window",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=7,
        help="Window length in days (default: 7)",
    )
    parser.set_defaults(func=cmd_stats)
