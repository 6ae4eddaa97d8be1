import pandas as pd
import pytest

from data_sources.holdings_sheet import classify_rows
from data_sources.holdings_sheet.transform import parse_numeric_series

HEADER = ["Scheme", "Category", "Value", "", "", "", "", "Units"]


def test_classify_rows_splits_direct_and_unit_holdings():
    rows = [
        HEADER,
        ["Axis Bluechip Fund - Direct Plan - Growth", "equity", "", "", "", "", "", "123.456"],
        ["PPF", "", "₹2,50,000", ""],
        ["HDFC Corporate Bond Fund", "Debt", "0", "", "", "", "", "1,000.5"],
        ["Stocks", "", "1,20,000.50"],
    ]

    holdings = classify_rows(rows)

    assert [h.scheme_name for h in holdings] == [
        "Axis Bluechip Fund - Direct Plan - Growth",
        "PPF",
        "HDFC Corporate Bond Fund",
        "Stocks",
    ]
    fund, ppf, bond, stocks = holdings
    assert fund.units == pytest.approx(123.456)
    assert fund.is_direct_value is False
    assert ppf.is_direct_value is True
    assert ppf.category == "debt"
    assert ppf.value == 250000.0
    assert bond.category == "debt"
    assert bond.units == pytest.approx(1000.5)
    assert stocks.category == "equity"
    assert stocks.value == pytest.approx(120000.5)


def test_direct_asset_names_are_case_insensitive():
    holdings = classify_rows([HEADER, ["Bank Balance", "", "5000"], ["NPS Equity", "", "700"]])
    assert [(h.scheme_name, h.category) for h in holdings] == [("Bank Balance", "debt"), ("NPS Equity", "equity")]


def test_category_defaults_to_equity():
    holdings = classify_rows([HEADER, ["Some Fund", "", "", "", "", "", "", "10"]])
    assert holdings[0].category == "equity"


def test_short_and_unnamed_rows_are_skipped():
    rows = [
        HEADER,
        ["Only Two", "equity"],
        ["", "equity", "100", "", "", "", "", "5"],
        ["Stocks", ""],
        [],
    ]
    assert classify_rows(rows) == []


def test_non_positive_amounts_are_skipped():
    rows = [
        HEADER,
        ["EPFO", "", "0"],
        ["PPF", "", "abc"],
        ["Some Fund", "equity", "", "", "", "", "", "-3"],
        ["Other Fund", "equity", "100"],
    ]
    assert classify_rows(rows) == []


def test_header_only_sheet_yields_nothing():
    assert classify_rows([HEADER]) == []


def test_skip_header_false_keeps_first_row():
    holdings = classify_rows([["Stocks", "", "10"]], skip_header=False)
    assert holdings[0].value == 10.0


def test_parse_numeric_series_strips_currency():
    parsed = parse_numeric_series(pd.Series(["₹1,234.50", "12%", "", "n/a"]))
    assert parsed.iloc[0] == 1234.5
    assert parsed.iloc[1] == 12.0
    assert pd.isna(parsed.iloc[2])
    assert pd.isna(parsed.iloc[3])


def test_non_finite_amounts_are_skipped():
    rows = [
        HEADER,
        ["Stocks", "", "inf"],
        ["PPF", "", "-inf"],
        ["EPFO", "", "NaN"],
        ["Some Fund", "equity", "", "", "", "", "", "inf"],
        ["Bank Balance", "", "1000"],
    ]
    holdings = classify_rows(rows)
    assert [(h.scheme_name, h.value) for h in holdings] == [("Bank Balance", 1000.0)]
