"""Domain models."""

from core.domain.nav import MatchKind, NavLookup, NavRecord, normalize_scheme_name
from core.domain.portfolio import DEBT, EQUITY, Holding, PortfolioSnapshot, ValuationDetail
from core.domain.reports import CadenceConfig, ReportKind

__all__ = [
    "CadenceConfig",
    "DEBT",
    "EQUITY",
    "Holding",
    "MatchKind",
    "NavLookup",
    "NavRecord",
    "PortfolioSnapshot",
    "ReportKind",
    "ValuationDetail",
    "normalize_scheme_name",
]
