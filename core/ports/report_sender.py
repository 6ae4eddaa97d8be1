from __future__ import annotations

from typing import Protocol

from core.domain.portfolio import PortfolioSnapshot
from core.domain.reports import ReportKind


class ReportSender(Protocol):
    """Delivery channel for a rendered portfolio report."""

    def send_report(self, snapshot: PortfolioSnapshot, kind: ReportKind) -> bool:
        """Deliver one report; return ``False`` instead of raising on delivery failure."""
