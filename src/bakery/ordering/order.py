"""Order aggregate: a placed checkout with frozen line prices.

Status vocabulary:
    Order Placed (initial), Processing, Shipped, Delivered, Cancelled

Admins may move an order to any status in the vocabulary; there is no
enforced transition graph.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from bakery.domain import bakery
from bakery.ordering.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PLACED = "Order Placed"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


ORDER_STATUSES = [s.value for s in OrderStatus]
ADDRESS_FIELDS = ("street", "city", "state", "postal_code", "country")


@bakery.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships. Captured at checkout and never edited."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)

    def to_dict(self) -> dict:
        return {
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "postalCode": self.postal_code,
            "country": self.country,
        }


@bakery.entity(part_of="Order")
class OrderItem:
    """One line of an order. ``price`` is the unit price at order time."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@bakery.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    amount = Float(required=True, min_value=0.0)
    address = ValueObject(ShippingAddress, required=True)
    payment_method = String(max_length=50, default="COD")
    payment = Boolean(default=False)
    status = String(choices=OrderStatus, default=OrderStatus.PLACED.value)
    placed_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, items, amount, address, payment_method="COD", payment=False):
        """Build a new order.

        Args:
            items: list of dicts with product_id, quantity and price.
            address: dict with the five ShippingAddress fields.
        """
        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            amount=amount,
            address=ShippingAddress(**address),
            payment_method=payment_method or "COD",
            payment=bool(payment),
            status=OrderStatus.PLACED.value,
            placed_at=now,
        )
        order.add_items([OrderItem(**item) for item in items])

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=len(items),
                amount=amount,
                payment_method=order.payment_method,
                placed_at=now,
            )
        )
        return order

    @property
    def subtotal(self) -> float:
        return sum(item.line_total for item in self.items)

    def update_status(self, new_status):
        if new_status not in ORDER_STATUSES:
            raise ValidationError({"status": [f"Status must be one of: {', '.join(ORDER_STATUSES)}"]})

        previous = self.status
        self.status = new_status
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=new_status,
                changed_at=datetime.now(UTC),
            )
        )

    def to_dict(self, product_names: dict | None = None) -> dict:
        items = []
        for item in self.items:
            line = {
                "productId": str(item.product_id),
                "quantity": item.quantity,
                "price": item.price,
            }
            if product_names is not None:
                line["productName"] = product_names.get(str(item.product_id), "Unknown Product")
            items.append(line)

        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "items": items,
            "amount": self.amount,
            "address": self.address.to_dict() if self.address else None,
            "paymentMethod": self.payment_method,
            "payment": bool(self.payment),
            "status": self.status,
            "date": self.placed_at.isoformat() if self.placed_at else None,
        }


@bakery.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        return self._dao.query.filter(user_id=str(user_id)).order_by("-placed_at").all().items

    def newest_first(self) -> list[Order]:
        return self._dao.query.order_by("-placed_at").all().items
