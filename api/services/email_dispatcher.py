"""
SMTP delivery of violation reports.

Sends the HTML report with the plain-text report as its fallback part. Delivery
failures are raised to the caller; nothing is retried here.
"""

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

import aiosmtplib

from config import settings

logger = logging.getLogger(__name__)


class ReportDeliveryError(Exception):
    """Raised when a report email cannot be sent."""


class EmailDispatcher:
    """Async report mailer using SMTP."""

    def __init__(self):
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_user = settings.smtp_user
        self.smtp_password = settings.smtp_password
        self.start_tls = settings.smtp_start_tls
        self.from_email = settings.email_from
        self.from_name = settings.email_from_name

    @property
    def is_configured(self) -> bool:
        """Check if SMTP credentials are set"""
        return bool(self.smtp_user and self.smtp_password)

    def build_message(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None
    ) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = to_email
        message["Subject"] = subject

        # Plain text must precede HTML in multipart/alternative
        if text_content:
            message.attach(MIMEText(text_content, "plain", "utf-8"))
        message.attach(MIMEText(html_content, "html", "utf-8"))
        return message

    async def send(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None
    ) -> None:
        """Send a report email.

        Args:
            to_email: Recipient address
            subject: Message subject
            html_content: HTML body
            text_content: Plain-text fallback body

        Raises:
            ReportDeliveryError: If SMTP is not configured or the send fails
        """
        if not self.is_configured:
            raise ReportDeliveryError("Email delivery is not configured (set SMTP_USER and SMTP_PASSWORD)")

        message = self.build_message(to_email, subject, html_content, text_content)

        try:
            await aiosmtplib.send(
                message,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.smtp_user,
                password=self.smtp_password,
                start_tls=self.start_tls
            )
        except aiosmtplib.SMTPException as e:
            logger.error(f"[Email/SMTP] Failed to send report to {to_email}: {e}", exc_info=True)
            raise ReportDeliveryError(f"Failed to send report email: {e}") from e
        except OSError as e:
            logger.error(f"[Email/SMTP] Could not reach {self.smtp_host}:{self.smtp_port}: {e}", exc_info=True)
            raise ReportDeliveryError(f"Could not connect to mail server: {e}") from e

        logger.info(f"[Email/SMTP] Sent report to {to_email}: {subject}")
