"""Google Sheets reader for the holdings list."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from core.domain.portfolio import Holding
from core.settings import Settings

from .transform import classify_rows

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
SHEET_RANGE = "A:H"


class HoldingsSourceError(RuntimeError):
    """Raised when the holdings sheet cannot be read."""


def _get_sheets_service(credentials_path: str):
    """Build a Sheets v4 client from a service-account key file.

    The service account needs read access to the spreadsheet (share the sheet
    with its client e-mail).
    """
    from google.oauth2 import service_account
    from googleapiclient.discovery import build

    key_file = Path(credentials_path).expanduser().resolve()
    credentials = service_account.Credentials.from_service_account_file(str(key_file), scopes=SCOPES)
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


def _http_status(exc: Exception) -> int | None:
    resp = getattr(exc, "resp", None)
    status = getattr(resp, "status", None)
    return int(status) if status is not None else None


class HoldingsSheetReader:
    """Reads raw rows from the holdings sheet and classifies them."""

    def __init__(self, spreadsheet_id: str, credentials_path: str, *, sheet_name: str = "Investments") -> None:
        self._spreadsheet_id = spreadsheet_id
        self._credentials_path = credentials_path
        self._sheet_name = sheet_name
        self._service: Any | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> HoldingsSheetReader:
        return cls(
            settings.google_sheets_id,
            settings.google_credentials_path,
            sheet_name=settings.google_sheets_name,
        )

    def _ensure_service(self) -> Any:
        if self._service is None:
            try:
                self._service = _get_sheets_service(self._credentials_path)
            except Exception as exc:
                raise HoldingsSourceError(f"Failed to initialize Google Sheets API: {exc}") from exc
            logger.info("Google Sheets API initialized")
        return self._service

    def fetch_rows(self) -> list[list[Any]]:
        service = self._ensure_service()
        sheet_range = f"{self._sheet_name}!{SHEET_RANGE}"
        logger.info("Reading portfolio from Google Sheet %s, range %s", self._spreadsheet_id, sheet_range)
        try:
            response = (
                service.spreadsheets().values().get(spreadsheetId=self._spreadsheet_id, range=sheet_range).execute()
            )
        except Exception as exc:
            if _http_status(exc) == 404:
                raise HoldingsSourceError(
                    "Google Sheet not found. Check GOOGLE_SHEETS_ID and ensure the service account has access."
                ) from exc
            raise HoldingsSourceError(f"Failed to read Google Sheet: {exc}") from exc
        return response.get("values") or []

    def read_holdings(self) -> list[Holding]:
        rows = self.fetch_rows()
        if not rows:
            raise HoldingsSourceError("No data found in Google Sheet")
        holdings = classify_rows(rows)
        logger.info("Read %d holdings from Google Sheet", len(holdings))
        return holdings
