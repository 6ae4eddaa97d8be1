"""Recipient configuration loader for email notifications."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, EmailStr, Field

logger = logging.getLogger(__name__)

DEFAULT_RECIPIENT_CONFIG = Path("config") / "notification_recipients.toml"

_ENV_TO = "EMAIL_TO"
_ENV_CC = "EMAIL_CC"
_ENV_BCC = "EMAIL_BCC"


class RecipientConfig(BaseModel):
    """Typed configuration for notification recipients."""

    to: list[EmailStr] = Field(default_factory=list, description="Primary recipients (To).")
    cc: list[EmailStr] = Field(default_factory=list, description="Carbon copy recipients (Cc).")
    bcc: list[EmailStr] = Field(default_factory=list, description="Blind carbon copy recipients (Bcc).")


def load_recipient_config(path: str | Path | None = None) -> RecipientConfig:
    """Load recipients from a TOML file.

    Raises:
        FileNotFoundError: When the TOML file is missing.
        ValueError: When the file content cannot be parsed.
    """

    file_path = Path(path) if path is not None else DEFAULT_RECIPIENT_CONFIG
    if not file_path.exists():
        raise FileNotFoundError(f"Recipient config not found: {file_path}")
    try:
        data = tomllib.loads(file_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Recipient config could not be parsed: {file_path}") from exc
    return RecipientConfig.model_validate(data)


def split_addresses(raw: str) -> list[str]:
    if not raw:
        return []
    return [addr.strip() for addr in raw.split(",") if addr.strip()]


def resolve_recipients(path: str | Path | None = None) -> RecipientConfig:
    """Load recipients from the TOML file, falling back to ``EMAIL_TO``/``EMAIL_CC``/``EMAIL_BCC``."""
    try:
        return load_recipient_config(path)
    except FileNotFoundError:
        logger.info("Recipient config file missing at %s, falling back to EMAIL_TO env variables.", path)

    env_to = os.environ.get(_ENV_TO, "")
    env_cc = os.environ.get(_ENV_CC, "")
    env_bcc = os.environ.get(_ENV_BCC, "")
    if not any([env_to.strip(), env_cc.strip(), env_bcc.strip()]):
        raise FileNotFoundError(f"No recipient config at {path} and {_ENV_TO} is not set")

    return RecipientConfig.model_validate(
        {"to": split_addresses(env_to), "cc": split_addresses(env_cc), "bcc": split_addresses(env_bcc)}
    )


__all__ = ["RecipientConfig", "load_recipient_config", "resolve_recipients", "split_addresses"]
