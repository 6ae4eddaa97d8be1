"""Port interfaces for adapters."""

from core.ports.holdings_source import HoldingsSource
from core.ports.report_sender import ReportSender

__all__ = ["HoldingsSource", "ReportSender"]
