import pytest

from data_sources.holdings_sheet import HoldingsSheetReader, HoldingsSourceError


class _Request:
    def __init__(self, result):
        self._result = result

    def execute(self):
        if isinstance(self._result, Exception):
            raise self._result
        return self._result


class _Values:
    def __init__(self, result, calls):
        self._result = result
        self._calls = calls

    def get(self, spreadsheetId, range):  # noqa: A002, N803
        self._calls.append((spreadsheetId, range))
        return _Request(self._result)


class FakeSheetsService:
    def __init__(self, result):
        self.calls: list[tuple[str, str]] = []
        self._result = result

    def spreadsheets(self):
        return self

    def values(self):
        return _Values(self._result, self.calls)


class FakeHttpError(Exception):
    def __init__(self, status: int):
        super().__init__(f"HTTP {status}")
        self.resp = type("Resp", (), {"status": status})()


def _install(monkeypatch, result):
    service = FakeSheetsService(result)
    monkeypatch.setattr(
        "data_sources.holdings_sheet.provider._get_sheets_service", lambda credentials_path: service
    )
    return service


def test_read_holdings_uses_sheet_range(monkeypatch):
    service = _install(
        monkeypatch,
        {"values": [["Scheme", "Category", "Value"], ["PPF", "", "1,000"], ["Some Fund", "", "", "", "", "", "", "2"]]},
    )
    reader = HoldingsSheetReader("sheet-123", "creds.json", sheet_name="Portfolio")

    holdings = reader.read_holdings()

    assert service.calls == [("sheet-123", "Portfolio!A:H")]
    assert [h.scheme_name for h in holdings] == ["PPF", "Some Fund"]


def test_service_is_built_once(monkeypatch):
    built: list[str] = []
    service = FakeSheetsService({"values": [["Scheme"], ["Stocks", "", "5"]]})

    def fake_build(credentials_path):
        built.append(credentials_path)
        return service

    monkeypatch.setattr("data_sources.holdings_sheet.provider._get_sheets_service", fake_build)
    reader = HoldingsSheetReader("sheet", "creds.json")
    reader.read_holdings()
    reader.read_holdings()
    assert built == ["creds.json"]


def test_empty_sheet_raises(monkeypatch):
    _install(monkeypatch, {})
    with pytest.raises(HoldingsSourceError, match="No data found"):
        HoldingsSheetReader("sheet", "creds.json").read_holdings()


def test_missing_sheet_raises_not_found(monkeypatch):
    _install(monkeypatch, FakeHttpError(404))
    with pytest.raises(HoldingsSourceError, match="Google Sheet not found"):
        HoldingsSheetReader("sheet", "creds.json").read_holdings()


def test_other_api_errors_are_wrapped(monkeypatch):
    _install(monkeypatch, FakeHttpError(500))
    with pytest.raises(HoldingsSourceError, match="Failed to read Google Sheet") as excinfo:
        HoldingsSheetReader("sheet", "creds.json").fetch_rows()
    assert isinstance(excinfo.value.__cause__, FakeHttpError)


def test_service_initialisation_failure(monkeypatch):
    def broken(credentials_path):
        raise OSError("key file missing")

    monkeypatch.setattr("data_sources.holdings_sheet.provider._get_sheets_service", broken)
    with pytest.raises(HoldingsSourceError, match="initialize Google Sheets API"):
        HoldingsSheetReader("sheet", "creds.json").read_holdings()
