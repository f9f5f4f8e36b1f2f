"""Outbound mail port.

Invoices are the only mail the storefront sends today. Adapters report
failure through the returned status instead of raising, so callers decide
how a bounced invoice surfaces to the admin.
"""

from abc import ABC, abstractmethod
from typing import NotRequired, TypedDict


class DeliveryReceipt(TypedDict):
    message_id: str | None
    status: str  # "sent" or "failed"
    error: NotRequired[str]


class EmailPort(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> DeliveryReceipt:
        """Deliver a plain-text message with an optional HTML alternative."""
        ...
