"""Report cadence rules."""

from .decider import (
    describe_cadence,
    due_reports,
    is_monthly_due,
    is_quarterly_due,
    is_weekly_due,
    is_yearly_due,
    sunday_based_weekday,
)

__all__ = [
    "describe_cadence",
    "due_reports",
    "is_monthly_due",
    "is_quarterly_due",
    "is_weekly_due",
    "is_yearly_due",
    "sunday_based_weekday",
]
