"""Invoice data assembly.

An invoice is read-only: it joins an order with its owner and the current
product names. Prices always come from the order lines, never from the
catalog, so a repriced or deleted product cannot change a past invoice.
"""

from dataclasses import dataclass, field
from datetime import datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from bakery.catalogue.product import Product
from bakery.errors import NotFound
from bakery.identity.user import User
from bakery.ordering.order import Order

UNKNOWN_PRODUCT = "Unknown Product"


@dataclass(frozen=True)
class InvoiceLine:
    product_name: str
    quantity: int
    unit_price: float

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class InvoiceData:
    order_id: str
    placed_at: datetime | None
    customer_name: str
    customer_email: str
    address_lines: list[str]
    status: str
    payment_method: str
    lines: list[InvoiceLine] = field(default_factory=list)
    amount: float | None = None

    @property
    def computed_total(self) -> float:
        return sum(line.line_total for line in self.lines)

    @property
    def grand_total(self) -> float:
        """The amount charged on the order; the line sum only when none was stored."""
        return self.amount if self.amount is not None else self.computed_total


def load_order(order_id: str) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFound("Order not found") from None


def gather_invoice(order_id: str) -> tuple[InvoiceData, Order]:
    order = load_order(order_id)
    return invoice_for(order), order


def invoice_for(order: Order) -> InvoiceData:
    """Join an already loaded order with its owner and product names."""
    try:
        user = current_domain.repository_for(User).get(order.user_id)
    except ObjectNotFoundError:
        raise NotFound("User not found") from None

    names = current_domain.repository_for(Product).names_for(item.product_id for item in order.items)
    lines = [
        InvoiceLine(
            product_name=names.get(str(item.product_id), UNKNOWN_PRODUCT),
            quantity=item.quantity,
            unit_price=item.price,
        )
        for item in order.items
    ]

    address = order.address
    address_lines = []
    if address:
        address_lines = [
            address.street,
            f"{address.city}, {address.state} {address.postal_code}",
            address.country,
        ]

    data = InvoiceData(
        order_id=str(order.id),
        placed_at=order.placed_at,
        customer_name=user.name,
        customer_email=user.email,
        address_lines=address_lines,
        status=order.status,
        payment_method=order.payment_method,
        lines=lines,
        amount=order.amount,
    )
    return data
