"""Fake email adapter: keeps outgoing mail in memory."""

from uuid import uuid4

from bakery.notifications.email_port import DeliveryReceipt, EmailPort


class FakeEmailAdapter(EmailPort):
    """Records every message instead of delivering it.

    Used when no SMTP credentials are configured and throughout the tests.
    """

    def __init__(self):
        self.outbox: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Mailbox unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Mailbox unavailable"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, to, subject, body, html_body=None) -> DeliveryReceipt:
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        message_id = f"<{uuid4().hex}@bakery.test>"
        self.outbox.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": subject,
                "body": body,
                "html_body": html_body,
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        self.outbox.clear()
        self.configure()
