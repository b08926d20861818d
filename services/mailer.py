"""
Contact form mailer
"""

import asyncio
import html
import smtplib
from email.message import EmailMessage
from typing import Optional

from schemas.requests import ContactRequest
from utils.config import Config, get_config
from utils.exceptions import ConfigurationError, ExternalServiceError
from utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SUBJECT = "New Contact Form Message"


class ContactMailer:
    """Relays contact form submissions to the site inbox over SMTP"""

    def __init__(self, config: Optional[Config] = None, timeout: float = 10.0):
        self.config = config or get_config()
        self.timeout = timeout

    def _require_settings(self) -> None:
        missing = [
            name for name, value in (
                ("SMTP_HOST", self.config.smtp_host),
                ("SMTP_USER", self.config.smtp_user),
                ("SMTP_PASS", self.config.smtp_pass),
            ) if not value
        ]
        if missing:
            raise ConfigurationError("Mail relay is not configured", {"missing": missing})

    def build_message(self, request: ContactRequest) -> EmailMessage:
        sender = self.config.smtp_user
        msg = EmailMessage()
        msg["Subject"] = f"New Contact Form: {request.subject}" if request.subject else DEFAULT_SUBJECT
        msg["From"] = f"JaipurTV Contact <{sender}>"
        msg["To"] = self.config.contact_to_email or sender
        if request.email:
            msg["Reply-To"] = request.email
        msg.set_content(
            f"Name: {request.name}\nEmail: {request.email}\n\nMessage:\n{request.message}"
        )
        msg.add_alternative(
            "<h3>New Contact Message</h3>"
            f"<p><b>Name:</b> {html.escape(request.name or '')}</p>"
            f"<p><b>Email:</b> {html.escape(request.email or '')}</p>"
            f"<p><b>Message:</b><br>{html.escape(request.message or '')}</p>",
            subtype="html"
        )
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        host = self.config.smtp_host
        port = self.config.smtp_port
        if port == 465:
            server = smtplib.SMTP_SSL(host, port, timeout=self.timeout)
        else:
            server = smtplib.SMTP(host, port, timeout=self.timeout)
        with server:
            if port != 465:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls()
                    server.ehlo()
            server.login(self.config.smtp_user, self.config.smtp_pass)
            server.send_message(msg)

    async def send(self, request: ContactRequest) -> None:
        """Send one contact message; blocking SMTP runs off the event loop"""
        self._require_settings()
        msg = self.build_message(request)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"❌ Contact email to {msg['To']} failed: {e}")
            raise ExternalServiceError("Email failed", {"error": str(e)})
        logger.info(f"📧 Contact email sent to {msg['To']}")


def get_contact_mailer() -> ContactMailer:
    """Dependency injection function for the contact mailer"""
    config = get_config()
    return ContactMailer(config, timeout=config.http_timeout_seconds)
