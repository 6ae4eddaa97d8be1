"""Portfolio valuation."""

from .aggregator import calculate_portfolio, value_holding

__all__ = ["calculate_portfolio", "value_holding"]
