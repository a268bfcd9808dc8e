"""Outgoing email.

Sends mail over SMTP when SMTP_HOST is configured (STARTTLS, or implicit TLS
on port 465). Without SMTP configuration messages are skipped and a warning
is logged, which keeps local development usable.
"""

import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from mathwizard import config

logger = logging.getLogger(__name__)


class Mailer:
    """Thin SMTP client built from configuration."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
    ):
        self.host = host if host is not None else config.SMTP_HOST
        self.port = port if port is not None else config.SMTP_PORT
        self.user = user if user is not None else config.SMTP_USER
        self.password = password if password is not None else config.SMTP_PASS
        self.sender = sender if sender is not None else config.SMTP_FROM

    @property
    def enabled(self) -> bool:
        return bool(self.host)

    def send(self, to_email: str, subject: str, text: str, html: Optional[str] = None) -> bool:
        """Send one message.

        Args:
            to_email: Recipient address.
            subject: Subject line.
            text: Plain text body.
            html: Optional HTML alternative.

        Returns:
            True if the message was handed to the SMTP server, False if mail
            is not configured or delivery failed.
        """
        if not self.enabled:
            logger.warning("SMTP not configured; skipping email to %s", to_email)
            return False

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender or self.user or "no-reply@localhost"
        msg["To"] = to_email
        msg.set_content(text)
        if html:
            msg.add_alternative(html, subtype="html")

        try:
            if self.port == 465:
                smtp = smtplib.SMTP_SSL(self.host, self.port, timeout=15)
            else:
                smtp = smtplib.SMTP(self.host, self.port, timeout=15)
            with smtp:
                if self.port != 465:
                    smtp.starttls()
                if self.user and self.password:
                    smtp.login(self.user, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            return False

        logger.info("Sent '%s' email to %s", subject, to_email)
        return True

    def send_verification_email(self, to_email: str, name: str, token: str, code: str) -> bool:
        """Send the link and 6-digit code that verify a new account."""
        link = f"{config.FRONTEND_URL}/verify-email?token={token}"
        text = (
            f"Hi {name},\n\n"
            f"Please verify your email by opening the link below:\n{link}\n\n"
            f"Or enter this 6-digit code on the verification page: {code}\n"
        )
        html = (
            f"<p>Hi {name},</p>"
            "<p>Please verify your email by clicking the link below:</p>"
            f'<p><a href="{link}">Verify Email</a></p>'
            "<p>Or enter this 6-digit code on the verification page:</p>"
            f"<h2>{code}</h2>"
        )
        return self.send(to_email, "Verify your email", text, html)
