"""Email service — delivers one-time codes via async SMTP."""

from __future__ import annotations

import logging
from email.message import EmailMessage

import aiosmtplib

from food_order.config import settings

logger = logging.getLogger(__name__)


def build_otp_email(code: str, ttl_seconds: int) -> tuple[str, str]:
    """Return ``(subject, html_body)`` for a password-reset code."""
    minutes = max(1, ttl_seconds // 60)
    subject = f"Your {settings.app_name} password reset code"
    html_body = (
        '<div style="font-family:Arial,sans-serif">'
        "<h2>Password reset</h2>"
        "<p>Use this code to reset your password:</p>"
        '<div style="font-size:28px;font-weight:700;letter-spacing:2px">'
        f"{code}</div>"
        f"<p>The code expires in {minutes} minutes. "
        "If you did not ask to reset your password you can ignore this email.</p>"
        "</div>"
    )
    return subject, html_body


class EmailService:
    """Sends transactional emails using the configured SMTP server."""

    async def send(self, to_email: str, subject: str, html_body: str) -> bool:
        """Send an HTML email to *to_email*.

        Returns ``True`` if the message was handed to the SMTP server.
        Without ``SMTP_HOST`` the message is only logged, and only in debug
        mode; otherwise nothing can be delivered and ``False`` is returned.
        """
        if not settings.smtp_host:
            if not settings.debug:
                logger.error("SMTP_HOST not set, cannot email %s", to_email)
                return False
            logger.warning(
                "SMTP_HOST not set, email to %s logged only: %s | %s",
                to_email,
                subject,
                html_body,
            )
            return True

        logger.info("Sending email to %s", to_email)
        try:
            msg = EmailMessage()
            msg["Subject"] = subject
            msg["From"] = settings.email_from
            msg["To"] = to_email
            msg.set_content("This message requires an HTML-capable email client.")
            msg.add_alternative(html_body, subtype="html")

            await aiosmtplib.send(
                msg,
                hostname=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.smtp_username or None,
                password=settings.smtp_password or None,
                start_tls=settings.smtp_start_tls,
            )
        except (aiosmtplib.SMTPException, OSError, ValueError) as exc:
            logger.exception("Email delivery to %r failed: %s", to_email, exc)
            return False

        logger.info("Email sent to %s", to_email)
        return True
