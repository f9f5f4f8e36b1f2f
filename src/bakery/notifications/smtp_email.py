"""SMTP email adapter built on the standard library mail stack."""

import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

import structlog

from bakery.notifications.email_port import DeliveryReceipt, EmailPort

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    """Delivers mail through an authenticated STARTTLS relay."""

    def __init__(self, host: str, port: int, username: str, password: str, sender: str | None = None, timeout=30):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.timeout = timeout

    def _build(self, to, subject, body, html_body) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid(domain=self.sender.split("@")[-1])
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")
        return message

    def send(self, to, subject, body, html_body=None) -> DeliveryReceipt:
        message = self._build(to, subject, body, html_body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Email delivery failed", to=to, subject=subject, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": message["Message-ID"], "status": "sent"}
