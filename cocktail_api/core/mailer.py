"""
Email adapter for the cocktail backend.

The default implementation uses SMTP, reading credentials from Settings.
"""

from email.mime.text import MIMEText
import logging
import smtplib
import ssl

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


class MailSender:
    """Plain-text SMTP sender. Failures are logged, never raised."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def _configured(self) -> bool:
        s = self.settings
        return bool(s.smtp_host and s.smtp_user and s.smtp_password and s.smtp_from and s.smtp_port)

    def send(self, to_address: str, subject: str, body: str) -> bool:
        """
        Send ``body`` to ``to_address``.
        Returns False without sending when SMTP is not configured or the transport fails.
        """
        settings = self.settings
        if not self._configured():
            logger.warning("SMTP configuration missing; skipping mail to %s", to_address)
            return False
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = settings.smtp_from
        msg["To"] = to_address
        port = settings.smtp_port or 465
        try:
            if port == 465:
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(settings.smtp_host, port, context=context) as server:
                    server.login(settings.smtp_user, settings.smtp_password)
                    server.sendmail(settings.smtp_from, [to_address], msg.as_string())
            else:
                with smtplib.SMTP(settings.smtp_host, port) as server:
                    server.ehlo()
                    server.starttls(context=ssl.create_default_context())
                    server.login(settings.smtp_user, settings.smtp_password)
                    server.sendmail(settings.smtp_from, [to_address], msg.as_string())
            return True
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("Failed to send mail to %s: %s", to_address, exc)
            return False
