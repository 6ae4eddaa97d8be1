"""Configurable email notification service."""

from __future__ import annotations

import logging
import smtplib
import ssl
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import make_msgid

from pydantic import AliasChoices, EmailStr, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class EmailSettings(BaseSettings):
    """Settings for the email notification service.

    Read from the environment (or ``.env``)::

        EMAIL_HOST=smtp.gmail.com
        EMAIL_PORT=587
        EMAIL_USER=alice@example.com
        EMAIL_PASSWORD=app-password
        EMAIL_FROM="Portfolio Tracker <alice@example.com>"
        EMAIL_SECURE=false

    ``EMAIL_SECURE=true`` selects implicit SSL (usually port 465); otherwise the
    connection is upgraded with STARTTLS when ``EMAIL_USE_TLS`` is on.
    """

    model_config = SettingsConfigDict(
        env_prefix="EMAIL_", env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    host: str = Field(..., description="SMTP host name or IP.")
    port: int = Field(default=587, ge=1, le=65535, description="SMTP port.")
    username: str | None = Field(default=None, validation_alias=AliasChoices("EMAIL_USER", "EMAIL_USERNAME"))
    password: SecretStr | None = None
    sender: str | None = Field(
        default=None,
        validation_alias=AliasChoices("EMAIL_FROM", "EMAIL_SENDER"),
        description="From header; defaults to the SMTP username.",
    )
    use_ssl: bool = Field(
        default=False,
        validation_alias=AliasChoices("EMAIL_SECURE", "EMAIL_USE_SSL"),
        description="Use implicit SSL (mutually exclusive with use_tls).",
    )
    use_tls: bool | None = Field(
        default=None, description="Upgrade connection via STARTTLS; defaults to the opposite of use_ssl."
    )
    timeout: float = Field(default=20.0, gt=0, description="Socket timeout in seconds.")
    max_retries: int = Field(default=1, ge=1, le=5)

    @model_validator(mode="after")
    def _resolve_defaults(self) -> "EmailSettings":
        if self.use_tls is None:
            self.use_tls = not self.use_ssl
        if not self.sender:
            if not self.username:
                raise ValueError("EMAIL_FROM or EMAIL_USER must be set")
            self.sender = self.username
        return self

    def require_credentials(self) -> tuple[str, str] | None:
        if self.username and self.password:
            return self.username, self.password.get_secret_value()
        return None


@dataclass(slots=True)
class EmailRecipients:
    """Grouped To/Cc/Bcc recipients."""

    to: Sequence[EmailStr]
    cc: Sequence[EmailStr] | None = None
    bcc: Sequence[EmailStr] | None = None

    def flattened(self) -> list[str]:
        """Return all recipients as plain email strings."""
        combined: list[str] = [str(addr) for addr in self.to]
        if self.cc:
            combined.extend(str(addr) for addr in self.cc)
        if self.bcc:
            combined.extend(str(addr) for addr in self.bcc)
        return combined


@dataclass(slots=True)
class EmailMessageOptions:
    """Optional overrides for the email payload."""

    subtype: str = "plain"
    headers: Mapping[str, str] | None = None
    reply_to: EmailStr | None = None


class EmailDeliveryError(RuntimeError):
    """Raised when the email service fails to deliver a message."""


class EmailNotificationService:
    """SMTP backed email delivery."""

    def __init__(self, settings: EmailSettings) -> None:
        self._settings = settings
        if self._settings.use_ssl and self._settings.use_tls:
            raise ValueError("use_ssl and use_tls are mutually exclusive; enable only one.")

    @property
    def settings(self) -> EmailSettings:
        return self._settings

    def send_email(
        self, *, subject: str, body: str, recipients: EmailRecipients, options: EmailMessageOptions | None = None
    ) -> str:
        """Send an email message.

        Returns:
            The RFC822 Message-ID generated for the message.

        Raises:
            ValueError: When no primary recipient is given.
            EmailDeliveryError: When every delivery attempt failed.
        """

        if not recipients.to:
            raise ValueError("recipients.to must not be empty.")
        opts = options or EmailMessageOptions()

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = str(self._settings.sender)
        message["To"] = ", ".join(str(addr) for addr in recipients.to)
        if recipients.cc:
            message["Cc"] = ", ".join(str(addr) for addr in recipients.cc)
        if opts.reply_to:
            message["Reply-To"] = str(opts.reply_to)
        if opts.headers:
            for key, value in opts.headers.items():
                message[key] = value

        message.set_content(body, subtype=opts.subtype)
        message_id = make_msgid(domain=self._settings.host)
        message["Message-ID"] = message_id

        self._deliver(message, recipients.flattened())
        return message_id

    def verify_connection(self) -> bool:
        """Open a session (TLS and login included) and report whether it succeeded."""
        try:
            with self._open_session():
                pass
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Email service error: %s", exc)
            return False
        logger.info("Email service is ready (%s:%s)", self._settings.host, self._settings.port)
        return True

    def _deliver(self, message: EmailMessage, recipients: Iterable[str]) -> None:
        attempt = 0
        last_error: Exception | None = None
        while attempt < self._settings.max_retries:
            attempt += 1
            try:
                self._send_via_smtp(message, recipients)
                logger.info("Email sent: message_id=%s recipients=%s", message["Message-ID"], recipients)
                return
            except (smtplib.SMTPException, OSError) as exc:
                last_error = exc
                logger.warning("Email delivery failed (attempt %d/%d): %s", attempt, self._settings.max_retries, exc)
        raise EmailDeliveryError("Unable to deliver email") from last_error

    def _open_session(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        smtp: smtplib.SMTP
        if self._settings.use_ssl:
            smtp = smtplib.SMTP_SSL(
                self._settings.host, self._settings.port, timeout=self._settings.timeout, context=context
            )
        else:
            smtp = smtplib.SMTP(self._settings.host, self._settings.port, timeout=self._settings.timeout)

        try:
            smtp.set_debuglevel(0)
            if not self._settings.use_ssl and self._settings.use_tls:
                smtp.starttls(context=context)
            credentials = self._settings.require_credentials()
            if credentials:
                smtp.login(*credentials)
        except Exception:
            smtp.close()
            raise
        return smtp

    def _send_via_smtp(self, message: EmailMessage, recipients: Iterable[str]) -> None:
        with self._open_session() as smtp:
            smtp.send_message(message, to_addrs=list(recipients))


__all__ = [
    "EmailDeliveryError",
    "EmailNotificationService",
    "EmailSettings",
    "EmailRecipients",
    "EmailMessageOptions",
]
