"""Classification of holdings sheet rows into ``Holding`` records."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any

import pandas as pd

from core.domain.portfolio import DEBT, EQUITY, Holding

logger = logging.getLogger(__name__)

# Assets whose value is kept directly in the sheet instead of units x NAV.
DIRECT_VALUE_ASSETS: dict[str, str] = {
    "stocks": EQUITY,
    "bank balance": DEBT,
    "epfo": DEBT,
    "ppf": DEBT,
    "nps debt": DEBT,
    "nps equity": EQUITY,
}

SHEET_COLUMNS = ("name", "category", "value", "c3", "c4", "c5", "c6", "units")
MIN_POPULATED_COLUMNS = 3


def parse_numeric_series(series: pd.Series) -> pd.Series:
    """Strip currency symbols and thousands separators, then parse as float."""
    cleaned = (
        series.astype(str)
        .str.replace(r"[₹$,%\s]", "", regex=True)
        .str.strip()
        .replace({"": None, "nan": None, "None": None})
    )
    return pd.to_numeric(cleaned, errors="coerce")


def rows_to_frame(rows: Sequence[Sequence[Any]]) -> pd.DataFrame:
    """Pad ragged sheet rows to the A:H width and load them into a frame."""
    width = len(SHEET_COLUMNS)
    padded = [list(row[:width]) + [""] * (width - len(row[:width])) for row in rows]
    df = pd.DataFrame(padded, columns=list(SHEET_COLUMNS), dtype=object)
    df["populated"] = [len(row) for row in rows]
    df["name"] = df["name"].fillna("").astype(str).str.strip()
    df["category"] = df["category"].fillna("").astype(str).str.strip().str.lower()
    df["value"] = parse_numeric_series(df["value"])
    df["units"] = parse_numeric_series(df["units"])
    return df


def _is_positive_amount(amount: float) -> bool:
    return pd.notna(amount) and math.isfinite(amount) and amount > 0


def classify_rows(rows: Sequence[Sequence[Any]], *, skip_header: bool = True) -> list[Holding]:
    """Turn sheet rows into holdings, preserving row order.

    Rows with fewer than three populated cells or an empty name are skipped, as
    are rows whose value (direct assets) or units (funds) is not a positive
    finite number.
    """
    data_rows = list(rows[1:] if skip_header else rows)
    if not data_rows:
        return []

    df = rows_to_frame(data_rows)
    holdings: list[Holding] = []
    for _, row in df.iterrows():
        name = row["name"]
        if row["populated"] < MIN_POPULATED_COLUMNS or not name:
            continue

        direct_category = DIRECT_VALUE_ASSETS.get(name.lower())
        if direct_category is not None:
            value = row["value"]
            if _is_positive_amount(value):
                holdings.append(
                    Holding(scheme_name=name, category=direct_category, is_direct_value=True, value=float(value))
                )
            else:
                logger.debug("Skipping direct-value row %r without a positive finite value", name)
            continue

        units = row["units"]
        if _is_positive_amount(units):
            holdings.append(Holding(scheme_name=name, category=row["category"] or EQUITY, units=float(units)))
        else:
            logger.debug("Skipping fund row %r without positive finite units", name)
    return holdings
