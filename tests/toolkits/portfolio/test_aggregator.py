from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from core.domain.portfolio import Holding
from toolkits.nav import NavFeedError, NavRegistry
from toolkits.portfolio import calculate_portfolio

NOW = datetime(2026, 10, 17, 20, 0, tzinfo=UTC)

FEED = "\n".join(
    [
        "1;a;b;Axis Bluechip Fund - Direct Plan - Growth;58.12;d",
        "2;a;b;HDFC Corporate Bond Fund - Direct Plan - Growth;31.4;d",
    ]
)


@pytest.fixture()
def registry() -> NavRegistry:
    reg = NavRegistry(lambda: pytest.fail("fresh registry must not refetch"))
    reg.ingest(FEED, now=NOW)
    return reg


def test_empty_holdings(registry):
    snapshot = calculate_portfolio([], registry, now=NOW)
    assert snapshot.total_value == 0
    assert snapshot.equity_percent == 0
    assert snapshot.debt_percent == 0
    assert snapshot.holdings_count == 0
    assert snapshot.errors == ()
    assert snapshot.details == ()
    assert snapshot.date == NOW


def test_direct_value_debt_holding(registry):
    holding = Holding(scheme_name="PPF", category="debt", is_direct_value=True, value=250000.0)
    snapshot = calculate_portfolio([holding], registry, now=NOW)
    assert snapshot.total_value == 250000.0
    assert snapshot.debt_value == 250000.0
    assert snapshot.equity_value == 0
    assert snapshot.debt_percent == 100.0
    detail = snapshot.details[0]
    assert detail.is_direct_value
    assert detail.units is None
    assert detail.nav is None
    assert detail.value == 250000.0


def test_unit_holding_value_is_units_times_nav(registry):
    units = 123.456
    holding = Holding(scheme_name="Axis Bluechip Fund - Direct Plan - Growth", category="equity", units=units)
    snapshot = calculate_portfolio([holding], registry, now=NOW)
    assert snapshot.details[0].value == units * 58.12
    assert snapshot.total_value == units * 58.12
    assert snapshot.equity_value == units * 58.12
    assert snapshot.equity_percent == 100.0


def test_unresolved_holding_is_reported_and_excluded(registry):
    holdings = [
        Holding(scheme_name="Axis Bluechip Fund - Direct Plan - Growth", units=10.0),
        Holding(scheme_name="Mystery Fund", category="debt", units=5.0),
        Holding(scheme_name="Stocks", category="equity", is_direct_value=True, value=1000.0),
    ]
    snapshot = calculate_portfolio(holdings, registry, now=NOW)

    assert snapshot.total_value == pytest.approx(10 * 58.12 + 1000.0)
    assert snapshot.debt_value == 0
    assert len(snapshot.errors) == 1
    assert "Mystery Fund" in snapshot.errors[0]
    assert [detail.scheme_name for detail in snapshot.details] == [
        "Axis Bluechip Fund - Direct Plan - Growth",
        "Mystery Fund",
        "Stocks",
    ]
    unresolved = snapshot.details[1]
    assert unresolved.error == "NAV not found"
    assert unresolved.value is None
    assert unresolved.nav is None
    assert unresolved.units == 5.0
    assert snapshot.unresolved == [unresolved]
    assert snapshot.holdings_count == 3


def test_split_percentages(registry):
    holdings = [
        Holding(scheme_name="Stocks", category="equity", is_direct_value=True, value=600.0),
        Holding(scheme_name="HDFC Corporate Bond Fund", category="debt", units=10.0),
    ]
    snapshot = calculate_portfolio(holdings, registry, now=NOW)
    total = 600.0 + 314.0
    assert snapshot.total_value == pytest.approx(total)
    assert snapshot.equity_percent == pytest.approx(600.0 / total * 100)
    assert snapshot.debt_percent == pytest.approx(314.0 / total * 100)


def test_unknown_category_counts_towards_total_only(registry):
    holdings = [
        Holding(scheme_name="Gold", category="gold", is_direct_value=True, value=500.0),
        Holding(scheme_name="Stocks", category="equity", is_direct_value=True, value=500.0),
    ]
    snapshot = calculate_portfolio(holdings, registry, now=NOW)
    assert snapshot.total_value == 1000.0
    assert snapshot.equity_percent == 50.0
    assert snapshot.debt_percent == 0.0


def test_stale_registry_is_refreshed_before_valuation():
    fetches: list[int] = []

    def fetcher() -> str:
        fetches.append(1)
        return FEED

    reg = NavRegistry(fetcher, clock=lambda: NOW)
    reg.ingest("", now=NOW - timedelta(days=2))
    snapshot = calculate_portfolio(
        [Holding(scheme_name="Axis Bluechip Fund - Direct Plan - Growth", units=2.0)], reg, now=NOW
    )
    assert fetches == [1]
    assert snapshot.total_value == 2.0 * 58.12


def test_refresh_failure_fails_the_call():
    def fetcher() -> str:
        raise NavFeedError("network down")

    with pytest.raises(NavFeedError):
        calculate_portfolio([], NavRegistry(fetcher), now=NOW)


def test_snapshot_is_immutable(registry):
    snapshot = calculate_portfolio([], registry, now=NOW)
    with pytest.raises(Exception):
        snapshot.total_value = 1.0  # type: ignore[misc]
