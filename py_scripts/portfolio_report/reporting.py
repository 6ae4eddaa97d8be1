from __future__ import annotations

import html
from datetime import datetime

from core.domain.portfolio import PortfolioSnapshot, ValuationDetail
from core.domain.reports import ReportKind

NOT_APPLICABLE = "-"
UNRESOLVED = "N/A"

_STYLE = """
body { font-family: Arial, sans-serif; margin: 20px; background-color: #f5f5f5; }
.container { max-width: 900px; margin: 0 auto; background-color: white; padding: 20px; border-radius: 10px; }
.header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px; border-radius: 5px; }
.header h1 { margin: 0 0 10px 0; font-size: 28px; }
.warnings { margin: 20px 0; padding: 15px; background-color: #fff3cd; border-left: 4px solid #ffc107; }
.summary-card { display: inline-block; min-width: 200px; margin: 10px 10px 0 0; padding: 20px; background-color: #f9f9f9; border-left: 4px solid #667eea; }
.summary-card .label { font-size: 12px; text-transform: uppercase; color: #666; }
.summary-card .value { font-size: 24px; font-weight: bold; }
.summary-card.total .value { color: #4CAF50; }
.summary-card.equity .value { color: #2196F3; }
.summary-card.debt .value { color: #FF9800; }
table { width: 100%; border-collapse: collapse; margin: 20px 0; }
th { background-color: #667eea; color: white; padding: 12px 10px; text-align: left; }
td { padding: 8px; border: 1px solid #ddd; }
td.num { text-align: right; }
tr.unresolved { background-color: #fff3cd; }
.footer { margin-top: 30px; padding-top: 20px; border-top: 1px solid #ddd; font-size: 12px; color: #666; text-align: center; }
"""


def html_escape(text: str) -> str:
    return html.escape(text or "")


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(amount: float | None) -> str:
    """Format rupees with Indian digit grouping, e.g. ``₹12,34,567.89``."""
    if amount is None:
        return UNRESOLVED
    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):.2f}".partition(".")
    return f"{sign}₹{_group_indian(whole)}.{fraction}"


def format_percent(percent: float) -> str:
    return f"{percent:.2f}%"


def format_long_date(moment: datetime) -> str:
    return f"{moment:%A}, {moment.day} {moment:%B %Y}"


def format_short_date(moment: datetime) -> str:
    return f"{moment:%d/%m/%Y}"


def build_subject(snapshot: PortfolioSnapshot, kind: ReportKind) -> str:
    return f"{kind.value} Portfolio Report - {format_inr(snapshot.total_value)} | {format_short_date(snapshot.date)}"


def _detail_cells(detail: ValuationDetail) -> tuple[str, str, str]:
    if detail.is_direct_value:
        return NOT_APPLICABLE, NOT_APPLICABLE, format_inr(detail.value)
    units = f"{detail.units:,.2f}" if detail.units is not None else NOT_APPLICABLE
    nav = format_inr(detail.nav) if detail.nav is not None else UNRESOLVED
    value = format_inr(detail.value) if detail.value is not None else UNRESOLVED
    return units, nav, value


def _render_warnings(errors: tuple[str, ...]) -> list[str]:
    if not errors:
        return []
    lines = ["<div class='warnings'>", "<h3>Warnings</h3>", "<ul>"]
    lines.extend(f"<li>{html_escape(error)}</li>" for error in errors)
    lines.extend(["</ul>", "</div>"])
    return lines


def _render_summary(snapshot: PortfolioSnapshot) -> list[str]:
    cards = (
        ("total", "Total Portfolio Value", format_inr(snapshot.total_value)),
        ("equity", "Equity Allocation", format_percent(snapshot.equity_percent)),
        ("debt", "Debt Allocation", format_percent(snapshot.debt_percent)),
    )
    lines = ["<div class='summary'>"]
    for css, label, value in cards:
        lines.append(
            f"<div class='summary-card {css}'><div class='label'>{label}</div><div class='value'>{value}</div></div>"
        )
    lines.append("</div>")
    return lines


def _render_holdings(snapshot: PortfolioSnapshot) -> list[str]:
    lines = [
        f"<h2>Holdings Details ({snapshot.holdings_count} schemes)</h2>",
        "<table>"
        "<thead><tr>"
        "<th>Scheme Name</th><th>Units</th><th>NAV</th><th>Value</th><th>Category</th>"
        "</tr></thead><tbody>",
    ]
    for detail in snapshot.details:
        units, nav, value = _detail_cells(detail)
        row_class = " class='unresolved'" if detail.error else ""
        lines.append(
            f"<tr{row_class}>"
            f"<td>{html_escape(detail.scheme_name)}</td>"
            f"<td class='num'>{units}</td>"
            f"<td class='num'>{nav}</td>"
            f"<td class='num'>{value}</td>"
            f"<td>{html_escape(detail.category.upper())}</td>"
            "</tr>"
        )
    lines.append("</tbody></table>")
    return lines


def render_report_html(snapshot: PortfolioSnapshot, kind: ReportKind) -> str:
    """Render the mail body for one report kind."""
    lines: list[str] = [
        "<!DOCTYPE html>",
        "<html><head><meta charset='utf-8'>",
        f"<style>{_STYLE}</style>",
        "</head><body><div class='container'>",
        "<div class='header'>",
        "<h1>Mutual Fund Portfolio Report</h1>",
        f"<p>{kind.value} Report | {format_long_date(snapshot.date)}</p>",
        "</div>",
    ]
    lines.extend(_render_warnings(snapshot.errors))
    lines.extend(_render_summary(snapshot))
    lines.extend(_render_holdings(snapshot))
    lines.extend(
        [
            "<div class='footer'>",
            "<p><strong>MF Portfolio Tracker</strong> | Holdings from Google Sheets</p>",
            "<p>NAV data source: AMFI India | Report generated automatically</p>",
            "<p>This report is for informational purposes only. "
            "Please consult a financial advisor for investment decisions.</p>",
            "</div>",
            "</div></body></html>",
        ]
    )
    return "\n".join(lines)
