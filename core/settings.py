import logging
import os
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.reports import CadenceConfig

logger = logging.getLogger(__name__)

DEFAULT_NAV_URL = "https://portal.amfiindia.com/spages/NAVAll.txt"
DEFAULT_DAILY_SCHEDULE = "0 20 * * *"

_KNOWN_GOOGLE_ENV_KEYS = {
    "GOOGLE_SHEETS_ID",
    "GOOGLE_SHEETS_NAME",
    "GOOGLE_CREDENTIALS_PATH",
}


def _warn_unknown_prefixed_env(prefix: str, known_keys: set[str]) -> None:
    unknown = sorted(key for key in os.environ if key.startswith(prefix) and key not in known_keys)
    if unknown:
        logger.warning("Unknown %s env vars ignored: %s", prefix, ", ".join(unknown))


def parse_month_list(raw: str) -> frozenset[int]:
    """Parse a comma separated month list such as ``"1,4,7,10"``."""
    months: set[int] = set()
    for token in raw.split(","):
        piece = token.strip()
        if not piece:
            continue
        try:
            month = int(piece)
        except ValueError as exc:
            raise ValueError(f"QUARTERLY_MONTHS entry is not an integer: {piece!r}") from exc
        if not 1 <= month <= 12:
            raise ValueError(f"QUARTERLY_MONTHS entry out of range 1-12: {month}")
        months.add(month)
    return frozenset(months)


class Settings(BaseSettings):
    """Application settings sourced from environment variables."""

    google_sheets_id: str = Field(
        min_length=1, validation_alias=AliasChoices("google_sheets_id", "GOOGLE_SHEETS_ID")
    )
    google_credentials_path: str = Field(
        min_length=1, validation_alias=AliasChoices("google_credentials_path", "GOOGLE_CREDENTIALS_PATH")
    )
    google_sheets_name: str = Field(
        default="Investments",
        validation_alias=AliasChoices("google_sheets_name", "GOOGLE_SHEETS_NAME", "sheet_name"),
    )

    nav_url: str = Field(default=DEFAULT_NAV_URL, validation_alias=AliasChoices("nav_url", "NAV_URL"))
    nav_timeout_seconds: float = Field(
        default=30.0, gt=0, validation_alias=AliasChoices("nav_timeout_seconds", "NAV_TIMEOUT_SECONDS")
    )

    daily_schedule: str = Field(
        default=DEFAULT_DAILY_SCHEDULE, validation_alias=AliasChoices("daily_schedule", "DAILY_SCHEDULE")
    )
    timezone: str = Field(default="Asia/Kolkata", validation_alias=AliasChoices("timezone", "TIMEZONE", "TZ_NAME"))

    weekly_day: int = Field(default=1, ge=0, le=6, validation_alias=AliasChoices("weekly_day", "WEEKLY_DAY"))
    monthly_date: int = Field(default=1, ge=1, le=31, validation_alias=AliasChoices("monthly_date", "MONTHLY_DATE"))
    quarterly_months: str = Field(
        default="1,4,7,10", validation_alias=AliasChoices("quarterly_months", "QUARTERLY_MONTHS")
    )
    yearly_month: int = Field(default=1, ge=1, le=12, validation_alias=AliasChoices("yearly_month", "YEARLY_MONTH"))
    send_daily_report: bool = Field(
        default=False, validation_alias=AliasChoices("send_daily_report", "SEND_DAILY_REPORT")
    )

    @field_validator("google_sheets_id", "google_credentials_path", mode="before")
    @classmethod
    def _strip_required(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("quarterly_months")
    @classmethod
    def _validate_quarterly_months(cls, value: str) -> str:
        months = parse_month_list(value)
        if not months:
            logger.warning("QUARTERLY_MONTHS is empty; quarterly reports are disabled")
        return ",".join(str(month) for month in sorted(months))

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {value}") from exc
        return value

    @model_validator(mode="after")
    def _warn(self) -> "Settings":
        if self.monthly_date > 28:
            logger.warning(
                "MONTHLY_DATE=%s does not occur in every month; monthly reports skip shorter months",
                self.monthly_date,
            )
        _warn_unknown_prefixed_env("GOOGLE_", _KNOWN_GOOGLE_ENV_KEYS)
        return self

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def cadence(self) -> CadenceConfig:
        return CadenceConfig(
            weekly_day=self.weekly_day,
            monthly_date=self.monthly_date,
            quarterly_months=parse_month_list(self.quarterly_months),
            yearly_month=self.yearly_month,
        )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Cached accessor so we only load settings once per process."""
    return Settings()
