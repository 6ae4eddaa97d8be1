from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_QUARTERLY_MONTHS = frozenset({1, 4, 7, 10})


class ReportKind(str, Enum):
    """Periodic report labels, also used verbatim in mail subjects."""

    YEARLY = "Yearly"
    QUARTERLY = "Quarterly"
    MONTHLY = "Monthly"
    WEEKLY = "Weekly"
    DAILY = "Daily"


@dataclass(frozen=True, slots=True)
class CadenceConfig:
    """Calendar settings for periodic reports.

    ``weekly_day`` counts from Sunday (0) to Saturday (6).
    """

    weekly_day: int = 1
    monthly_date: int = 1
    quarterly_months: frozenset[int] = field(default=DEFAULT_QUARTERLY_MONTHS)
    yearly_month: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.weekly_day <= 6:
            raise ValueError(f"weekly_day must be within 0-6, got {self.weekly_day}")
        if not 1 <= self.monthly_date <= 31:
            raise ValueError(f"monthly_date must be within 1-31, got {self.monthly_date}")
        if not 1 <= self.yearly_month <= 12:
            raise ValueError(f"yearly_month must be within 1-12, got {self.yearly_month}")
        invalid = sorted(month for month in self.quarterly_months if not 1 <= month <= 12)
        if invalid:
            raise ValueError(f"quarterly_months must be within 1-12, got {invalid}")
        object.__setattr__(self, "quarterly_months", frozenset(self.quarterly_months))
