"""Calendar rules deciding which periodic reports are due."""

from __future__ import annotations

from datetime import date

from core.domain.reports import CadenceConfig, ReportKind

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def sunday_based_weekday(day: date) -> int:
    """Weekday number with Sunday as 0 and Saturday as 6."""
    return day.isoweekday() % 7


def is_yearly_due(day: date, config: CadenceConfig) -> bool:
    return day.day == config.monthly_date and day.month == config.yearly_month


def is_quarterly_due(day: date, config: CadenceConfig) -> bool:
    return (
        day.day == config.monthly_date
        and day.month in config.quarterly_months
        and not is_yearly_due(day, config)
    )


def is_monthly_due(day: date, config: CadenceConfig) -> bool:
    return day.day == config.monthly_date


def is_weekly_due(day: date, config: CadenceConfig) -> bool:
    return sunday_based_weekday(day) == config.weekly_day


def due_reports(day: date, config: CadenceConfig, *, include_daily: bool = False) -> list[ReportKind]:
    """Return the reports due on ``day`` in dispatch order.

    Order is yearly or quarterly (never both; yearly wins), then monthly, then
    weekly, then daily when enabled.
    """
    due: list[ReportKind] = []
    if is_yearly_due(day, config):
        due.append(ReportKind.YEARLY)
    elif is_quarterly_due(day, config):
        due.append(ReportKind.QUARTERLY)
    if is_monthly_due(day, config):
        due.append(ReportKind.MONTHLY)
    if is_weekly_due(day, config):
        due.append(ReportKind.WEEKLY)
    if include_daily:
        due.append(ReportKind.DAILY)
    return due


def describe_cadence(config: CadenceConfig) -> str:
    months = ",".join(str(month) for month in sorted(config.quarterly_months)) or "-"
    return (
        f"weekly on {WEEKDAY_NAMES[config.weekly_day]}, monthly on day {config.monthly_date}, "
        f"quarterly in months {months}, yearly in month {config.yearly_month}"
    )
