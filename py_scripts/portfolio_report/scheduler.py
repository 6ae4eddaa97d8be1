"""Daily timer driving the portfolio cycle."""

from __future__ import annotations

import asyncio
import logging
import signal
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo

from toolkits.cadence import describe_cadence

from .pipeline import PortfolioTask

logger = logging.getLogger("portfolio_report")


@dataclass(frozen=True, slots=True)
class DailySchedule:
    """Once-a-day trigger time, parsed from a ``"M H * * *"`` cron expression."""

    hour: int
    minute: int

    @classmethod
    def parse(cls, expression: str) -> DailySchedule:
        fields = expression.split()
        if len(fields) != 5:
            raise ValueError(f"cron expression needs 5 fields, got {expression!r}")
        minute_raw, hour_raw, *rest = fields
        if any(part != "*" for part in rest):
            raise ValueError(f"only daily schedules ('M H * * *') are supported, got {expression!r}")
        try:
            minute, hour = int(minute_raw), int(hour_raw)
        except ValueError as exc:
            raise ValueError(f"minute and hour must be numbers in {expression!r}") from exc
        if not 0 <= minute <= 59 or not 0 <= hour <= 23:
            raise ValueError(f"minute/hour out of range in {expression!r}")
        return cls(hour=hour, minute=minute)

    def next_run_after(self, now: datetime) -> datetime:
        candidate = now.replace(hour=self.hour, minute=self.minute, second=0, microsecond=0)
        if candidate <= now:
            candidate += timedelta(days=1)
        return candidate

    def __str__(self) -> str:
        return f"{self.minute} {self.hour} * * *"


def _install_signal_handlers(stop_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()

    def _request_stop(signame: str) -> None:
        logger.warning("%s received. Shutting down after the current cycle...", signame)
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _request_stop, sig.name)
        except (NotImplementedError, RuntimeError):
            logger.debug("Signal handlers unavailable for %s", sig.name)


async def run_scheduler(
    task: PortfolioTask,
    schedule: DailySchedule,
    tz: tzinfo,
    *,
    stop_event: asyncio.Event | None = None,
    install_signals: bool = True,
) -> None:
    """Run ``task`` once per day until ``stop_event`` is set.

    Cycles run in a worker thread and are awaited to completion, so a stop
    request only takes effect between cycles.
    """
    stop = stop_event or asyncio.Event()
    if install_signals:
        _install_signal_handlers(stop)

    logger.info("Scheduler started. Schedule: %s (%s)", schedule, tz)
    logger.info("Reports: %s", describe_cadence(task.cadence))

    while not stop.is_set():
        now = datetime.now(tz)
        next_run = schedule.next_run_after(now)
        delay = (next_run - now).total_seconds()
        logger.info("Next portfolio check at %s", next_run.isoformat(timespec="minutes"))
        try:
            await asyncio.wait_for(stop.wait(), timeout=delay)
            break
        except TimeoutError:
            pass

        logger.info("Triggering scheduled daily task")
        try:
            await asyncio.to_thread(task.run_daily_task)
        except Exception:
            logger.exception("Daily task failed")

    logger.info("Scheduler stopped")
