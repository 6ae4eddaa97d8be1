"""Entry point: daily portfolio valuation and periodic report mailing."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from core.settings import Settings, get_settings
from data_sources.holdings_sheet import HoldingsSheetReader
from toolkits.nav import NavRegistry, make_fetcher
from toolkits.notifications import resolve_recipients

from .cli import parse_args
from .email_report import EmailReportSender, build_email_sender
from .pipeline import PortfolioTask
from .scheduler import DailySchedule, run_scheduler

logger = logging.getLogger("portfolio_report")


def _configure_logging(level: str) -> None:
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _missing_fields(exc: ValidationError) -> list[str]:
    names: list[str] = []
    for error in exc.errors():
        if error.get("type") in {"missing", "string_too_short"}:
            names.extend(str(part).upper() for part in error.get("loc", ()))
    return names


def build_task(settings: Settings, sender: EmailReportSender) -> PortfolioTask:
    registry = NavRegistry(make_fetcher(settings.nav_url, timeout=settings.nav_timeout_seconds))
    return PortfolioTask(
        holdings_source=HoldingsSheetReader.from_settings(settings),
        registry=registry,
        sender=sender,
        cadence=settings.cadence(),
        tz=settings.tz,
        include_daily=settings.send_daily_report,
    )


def _run_cycle_once(task: PortfolioTask) -> int:
    try:
        task.run_daily_task()
    except Exception:
        logger.exception("Daily task aborted")
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.log_level)
    logger.info("MF Portfolio Tracker starting")

    try:
        settings = get_settings()
        sender = build_email_sender(resolve_recipients(args.recipient_config))
        schedule = DailySchedule.parse(settings.daily_schedule)
    except ValidationError as exc:
        missing = _missing_fields(exc)
        if missing:
            logger.error("Missing required environment variables: %s", ", ".join(missing))
        logger.error("Invalid configuration: %s", exc)
        return 1
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    logger.info("Environment variables validated")

    task = build_task(settings, sender)

    if args.test:
        logger.info("Running manual test mode")
        sender.service.verify_connection()
        status = _run_cycle_once(task)
        logger.info("Test completed")
        return status
    if args.run_once:
        status = _run_cycle_once(task)
        logger.info("Run-once completed")
        return status

    asyncio.run(run_scheduler(task, schedule, settings.tz))
    return 0


if __name__ == "__main__":
    sys.exit(main())
