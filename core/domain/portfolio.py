"""Portfolio domain models: holdings, per-holding valuations and snapshots."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

EQUITY = "equity"
DEBT = "debt"

NAV_NOT_FOUND = "NAV not found"


class Holding(BaseModel):
    """Normalized holding row supplied by the holdings source."""

    scheme_name: str = Field(..., min_length=1, description="Scheme or asset name as written in the sheet.")
    category: str = Field(default=EQUITY, description="Asset class, normally 'equity' or 'debt'.")
    is_direct_value: bool = Field(default=False, description="Value is recorded directly, no NAV lookup.")
    units: float | None = Field(
        default=None, gt=0, allow_inf_nan=False, description="Units held (unit-based holdings)."
    )
    value: float | None = Field(
        default=None, gt=0, allow_inf_nan=False, description="Monetary value (direct-value holdings)."
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_kind(self) -> "Holding":
        if self.is_direct_value and self.value is None:
            raise ValueError(f"direct-value holding {self.scheme_name!r} requires a value")
        if not self.is_direct_value and self.units is None:
            raise ValueError(f"unit-based holding {self.scheme_name!r} requires units")
        return self


class ValuationDetail(BaseModel):
    """Valuation of one holding. ``None`` marks a figure that is not applicable or unresolved."""

    scheme_name: str
    category: str
    units: float | None = None
    nav: float | None = None
    value: float | None = None
    is_direct_value: bool = False
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def resolved(self) -> bool:
        return self.value is not None


class PortfolioSnapshot(BaseModel):
    """Result of one valuation pass over the full holdings list."""

    total_value: float = 0.0
    equity_value: float = 0.0
    debt_value: float = 0.0
    equity_percent: float = 0.0
    debt_percent: float = 0.0
    details: tuple[ValuationDetail, ...] = ()
    errors: tuple[str, ...] = ()
    date: datetime
    holdings_count: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def unresolved(self) -> list[ValuationDetail]:
        return [detail for detail in self.details if detail.error]
