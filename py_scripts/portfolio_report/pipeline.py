from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, tzinfo

from core.domain.portfolio import PortfolioSnapshot
from core.domain.reports import CadenceConfig, ReportKind
from core.ports import HoldingsSource, ReportSender
from data_sources.holdings_sheet import HoldingsSourceError
from toolkits.cadence import due_reports
from toolkits.nav import NavFeedError, NavRegistry
from toolkits.portfolio import calculate_portfolio

from .reporting import format_inr, format_percent

logger = logging.getLogger("portfolio_report")


@dataclass(frozen=True, slots=True)
class CycleResult:
    snapshot: PortfolioSnapshot
    due: tuple[ReportKind, ...]
    sent: tuple[ReportKind, ...]
    failed: tuple[ReportKind, ...]


class PortfolioTask:
    """One valuation and report-dispatch cycle; at most one runs at a time."""

    def __init__(
        self,
        *,
        holdings_source: HoldingsSource,
        registry: NavRegistry,
        sender: ReportSender,
        cadence: CadenceConfig,
        tz: tzinfo,
        include_daily: bool = False,
    ) -> None:
        self._holdings_source = holdings_source
        self._registry = registry
        self._sender = sender
        self._cadence = cadence
        self._tz = tz
        self._include_daily = include_daily
        self._in_flight = threading.Lock()

    @property
    def cadence(self) -> CadenceConfig:
        return self._cadence

    @property
    def busy(self) -> bool:
        return self._in_flight.locked()

    def run_daily_task(self, now: datetime | None = None) -> CycleResult | None:
        """Run one cycle. Returns ``None`` when skipped or aborted by a transport failure."""
        if not self._in_flight.acquire(blocking=False):
            logger.warning("Previous portfolio cycle still running, skipping this trigger")
            return None
        try:
            return self._run_cycle(now or datetime.now(self._tz))
        finally:
            self._in_flight.release()

    def _run_cycle(self, now: datetime) -> CycleResult | None:
        logger.info("Running daily portfolio check at %s", now.isoformat(timespec="seconds"))
        try:
            self._registry.ensure_fresh(now)
            holdings = self._holdings_source.read_holdings()
            snapshot = calculate_portfolio(holdings, self._registry, now=now)
        except (NavFeedError, HoldingsSourceError) as exc:
            logger.error("Daily task aborted: %s", exc)
            return None

        _log_snapshot(snapshot)

        due = due_reports(now.date(), self._cadence, include_daily=self._include_daily)
        if not due:
            logger.info("No reports scheduled for today")
            return CycleResult(snapshot=snapshot, due=(), sent=(), failed=())

        logger.info("Sending %d report(s): %s", len(due), ", ".join(kind.value for kind in due))
        sent: list[ReportKind] = []
        failed: list[ReportKind] = []
        for kind in due:
            try:
                delivered = self._sender.send_report(snapshot, kind)
            except Exception:
                logger.exception("Unexpected error while sending %s report", kind.value)
                delivered = False
            (sent if delivered else failed).append(kind)
        return CycleResult(snapshot=snapshot, due=tuple(due), sent=tuple(sent), failed=tuple(failed))


def _log_snapshot(snapshot: PortfolioSnapshot) -> None:
    logger.info(
        "Portfolio calculated: total=%s equity=%s debt=%s holdings=%d",
        format_inr(snapshot.total_value),
        format_percent(snapshot.equity_percent),
        format_percent(snapshot.debt_percent),
        snapshot.holdings_count,
    )
    if snapshot.errors:
        logger.warning("Warnings: %d", len(snapshot.errors))
        for error in snapshot.errors:
            logger.warning("  - %s", error)
