"""Portfolio valuation over heterogeneous holdings."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from core.domain.portfolio import DEBT, EQUITY, NAV_NOT_FOUND, Holding, PortfolioSnapshot, ValuationDetail
from toolkits.nav import NavRegistry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Totals:
    total: float = 0.0
    equity: float = 0.0
    debt: float = 0.0
    details: list[ValuationDetail] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def add(self, category: str, value: float) -> None:
        self.total += value
        if category == EQUITY:
            self.equity += value
        elif category == DEBT:
            self.debt += value


def _percent(part: float, total: float) -> float:
    return part / total * 100 if total > 0 else 0.0


def value_holding(holding: Holding, registry: NavRegistry) -> ValuationDetail:
    """Value a single holding; an unresolved NAV yields a detail carrying an error tag."""
    if holding.is_direct_value:
        return ValuationDetail(
            scheme_name=holding.scheme_name,
            category=holding.category,
            value=holding.value,
            is_direct_value=True,
        )

    nav = registry.get_nav(holding.scheme_name)
    if nav is None:
        return ValuationDetail(
            scheme_name=holding.scheme_name,
            category=holding.category,
            units=holding.units,
            error=NAV_NOT_FOUND,
        )

    return ValuationDetail(
        scheme_name=holding.scheme_name,
        category=holding.category,
        units=holding.units,
        nav=nav,
        value=holding.units * nav,
    )


def calculate_portfolio(
    holdings: Sequence[Holding],
    registry: NavRegistry,
    *,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> PortfolioSnapshot:
    """Value ``holdings`` against ``registry`` and aggregate by category.

    The registry is refreshed first when stale; a failed refresh propagates and
    is the only way this call fails. Holdings without a resolvable NAV are kept
    in ``details`` with an error tag, listed in ``errors`` and contribute
    nothing to the totals. Categories other than equity and debt count towards
    the total only.
    """
    registry.ensure_fresh(now)

    totals = _Totals()
    for holding in holdings:
        detail = value_holding(holding, registry)
        totals.details.append(detail)
        if detail.error:
            logger.warning("Skipping %s - NAV not available", holding.scheme_name)
            totals.errors.append(f"NAV not found for: {holding.scheme_name}")
            continue
        totals.add(holding.category, detail.value or 0.0)

    return PortfolioSnapshot(
        total_value=totals.total,
        equity_value=totals.equity,
        debt_value=totals.debt,
        equity_percent=_percent(totals.equity, totals.total),
        debt_percent=_percent(totals.debt, totals.total),
        details=tuple(totals.details),
        errors=tuple(totals.errors),
        date=now or datetime.now(tz),
        holdings_count=len(holdings),
    )
