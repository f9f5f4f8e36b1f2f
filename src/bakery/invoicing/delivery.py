"""Emailing invoices to customers."""

import structlog

from bakery.errors import UpstreamFailure
from bakery.invoicing.invoice import InvoiceData
from bakery.invoicing.template import InvoiceTemplate

logger = structlog.get_logger(__name__)


def send_invoice(email, data: InvoiceData) -> str:
    """Send the rendered invoice to the order's owner and return the message id.

    Blocking: callers on the event loop should run it in a worker thread.
    """
    content = InvoiceTemplate.render(data)
    receipt = email.send(
        to=data.customer_email,
        subject=content["subject"],
        body=content["body"],
        html_body=content["html_body"],
    )

    if receipt.get("status") != "sent":
        logger.error("Invoice delivery failed", order_id=data.order_id, error=receipt.get("error"))
        raise UpstreamFailure("Error sending invoice", details=receipt.get("error"))

    logger.info("Invoice sent", order_id=data.order_id, message_id=receipt.get("message_id"))
    return receipt.get("message_id")
