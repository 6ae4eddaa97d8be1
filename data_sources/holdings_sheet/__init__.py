"""Holdings sheet data source."""

from .provider import HoldingsSheetReader, HoldingsSourceError
from .transform import DIRECT_VALUE_ASSETS, classify_rows, parse_numeric_series

__all__ = [
    "DIRECT_VALUE_ASSETS",
    "HoldingsSheetReader",
    "HoldingsSourceError",
    "classify_rows",
    "parse_numeric_series",
]
