from __future__ import annotations

from core.ports import HoldingsSource, ReportSender


def test_ports_expose_expected_methods() -> None:
    assert {"read_holdings"} <= set(HoldingsSource.__dict__)
    assert {"send_report"} <= set(ReportSender.__dict__)


def test_ports_module_exports() -> None:
    assert HoldingsSource.__name__ == "HoldingsSource"
    assert ReportSender.__name__ == "ReportSender"
