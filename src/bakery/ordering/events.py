"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from bakery.domain import bakery


@bakery.event(part_of="Order")
class OrderPlaced:
    """A shopper checked out and the order was recorded."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    amount = Float(required=True)
    payment_method = String()
    placed_at = DateTime(required=True)


@bakery.event(part_of="Order")
class OrderStatusChanged:
    """An admin moved the order to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String()
    new_status = String(required=True)
    changed_at = DateTime(required=True)
