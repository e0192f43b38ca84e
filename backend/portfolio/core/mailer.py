# portfolio/core/mailer.py
import html
import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional, Protocol

from portfolio.core.settings import Settings, settings as default_settings
from portfolio.lib.validation import Submission

log = logging.getLogger("uvicorn.error")

CONTACT_DESTINATION = "alex.morgan@example.com"


class DeliveryError(Exception):
    """The mail collaborator could not deliver a notification."""


class NotificationSender(Protocol):
    def send(self, submission: Submission) -> None: ...


def build_subject(name: str) -> str:
    return f"New Contact Form Submission from {' '.join(name.split())}"


def build_body(submission: Submission) -> str:
    message = html.escape(submission.message).replace("\r\n", "\n").replace("\n", "<br>")
    return (
        "<h2>New Contact Form Submission</h2>\n"
        f"<p><strong>Name:</strong> {html.escape(submission.name)}</p>\n"
        f"<p><strong>Email:</strong> {html.escape(submission.email)}</p>\n"
        f"<p><strong>Mobile:</strong> {html.escape(submission.mobile)}</p>\n"
        "<p><strong>Message:</strong></p>\n"
        f"<p>{message}</p>\n"
        "<hr>\n"
        "<p><em>Sent from your portfolio contact form</em></p>\n"
    )


def build_message(submission: Submission, sender: str, to: str = CONTACT_DESTINATION) -> MIMEText:
    msg = MIMEText(build_body(submission), "html", "utf-8")
    msg["Subject"] = build_subject(submission.name)
    msg["From"] = sender
    msg["To"] = to
    msg["Reply-To"] = submission.email
    return msg


class SmtpSender:
    """Delivers contact notifications over SMTP with implicit TLS."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def send(self, submission: Submission) -> None:
        user = self.settings.email_user
        password = self.settings.email_pass
        if not user or not password:
            raise DeliveryError("mail credentials are not configured (EMAIL_USER / EMAIL_PASS)")

        msg = build_message(submission, sender=user)
        try:
            with smtplib.SMTP_SSL(
                self.settings.smtp_host,
                self.settings.smtp_port,
                timeout=self.settings.smtp_timeout_seconds,
            ) as smtp:
                smtp.login(user, password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(f"SMTP delivery failed: {exc}") from exc
        log.info(f"[mailer] contact notification sent to {CONTACT_DESTINATION}")
