from __future__ import annotations

import argparse
from collections.abc import Sequence


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Value the mutual fund portfolio daily and mail the periodic reports that are due."
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--run-once",
        action="store_true",
        help="Run the daily task once and exit (for external schedulers such as CI cron jobs).",
    )
    mode.add_argument(
        "--test",
        action="store_true",
        help="Verify the SMTP connection, run the daily task once and exit.",
    )
    parser.add_argument(
        "--recipient-config",
        default="config/notification_recipients.toml",
        help="Path to recipient TOML; EMAIL_TO is used when the file is missing.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity.",
    )
    return parser.parse_args(argv)
