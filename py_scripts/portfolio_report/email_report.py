from __future__ import annotations

import logging
import os

from core.domain.portfolio import PortfolioSnapshot
from core.domain.reports import ReportKind
from toolkits.notifications import (
    EmailDeliveryError,
    EmailMessageOptions,
    EmailNotificationService,
    EmailRecipients,
    EmailSettings,
    RecipientConfig,
)

from .reporting import build_subject, render_report_html

logger = logging.getLogger("portfolio_report")


class EmailReportSender:
    """Renders a snapshot and mails it to the configured recipients."""

    def __init__(self, service: EmailNotificationService, recipients: RecipientConfig) -> None:
        self._service = service
        self._recipients = recipients

    @property
    def service(self) -> EmailNotificationService:
        return self._service

    def send_report(self, snapshot: PortfolioSnapshot, kind: ReportKind) -> bool:
        if not self._recipients.to:
            logger.warning("No primary recipients configured, skipping %s report.", kind.value)
            return False

        email_recipients = EmailRecipients(
            to=self._recipients.to, cc=self._recipients.cc or None, bcc=self._recipients.bcc or None
        )
        try:
            message_id = self._service.send_email(
                subject=build_subject(snapshot, kind),
                body=render_report_html(snapshot, kind),
                recipients=email_recipients,
                options=EmailMessageOptions(subtype="html"),
            )
        except EmailDeliveryError as exc:
            logger.error("Failed to send %s report: %s", kind.value, exc.__cause__ or exc)
            return False
        logger.info("%s report sent successfully. Message ID: %s", kind.value, message_id)
        return True


def sanitize_email_environment() -> None:
    """Remove empty EMAIL_* values to avoid pydantic parsing errors."""
    for key in (
        "EMAIL_HOST",
        "EMAIL_PORT",
        "EMAIL_FROM",
        "EMAIL_SECURE",
        "EMAIL_USE_TLS",
        "EMAIL_USE_SSL",
        "EMAIL_TIMEOUT",
        "EMAIL_MAX_RETRIES",
        "EMAIL_SENDER",
        "EMAIL_USERNAME",
        "EMAIL_USER",
        "EMAIL_PASSWORD",
    ):
        value = os.environ.get(key)
        if value is not None and value.strip() == "":
            del os.environ[key]


def build_email_sender(recipients: RecipientConfig) -> EmailReportSender:
    sanitize_email_environment()
    return EmailReportSender(EmailNotificationService(EmailSettings()), recipients)
