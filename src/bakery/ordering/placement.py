"""Order placement: command and handler.

Checkout input is checked in full before anything is written. The new order
and the emptied cart are saved in the same unit of work, so either both are
committed or neither is.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from bakery.domain import bakery
from bakery.errors import InvalidInput, Unauthorized
from bakery.identity.user import User
from bakery.ordering.order import ADDRESS_FIELDS, Order

logger = structlog.get_logger(__name__)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_checkout(items, amount, address) -> None:
    """Reject incomplete checkout input with the field names that are missing."""
    missing = [
        name
        for name, value in (("items", items), ("amount", amount), ("address", address))
        if value is None
    ]
    if missing:
        raise InvalidInput("Missing required fields for order placement", details=missing)

    if not isinstance(items, list) or not items:
        raise InvalidInput("Items must be a non-empty array")

    if not isinstance(address, dict):
        raise InvalidInput("Missing required address fields", details=list(ADDRESS_FIELDS))

    missing_address = [name for name in ADDRESS_FIELDS if _is_blank(address.get(name))]
    if missing_address:
        raise InvalidInput("Missing required address fields", details=missing_address)


def normalize_items(items) -> list[dict]:
    """Coerce ids to strings, quantities to ints and prices to floats."""
    normalized = []
    for position, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise InvalidInput(f"Item {position} must be an object")

        product_id = next(
            (item[key] for key in ("product_id", "productId", "_id") if not _is_blank(item.get(key))),
            None,
        )
        if product_id is None:
            raise InvalidInput(f"Item {position} is missing a product id")

        quantity = item.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int | float | str):
            raise InvalidInput(f"Item {position} has an invalid quantity")
        try:
            as_float = float(quantity)
        except ValueError:
            raise InvalidInput(f"Item {position} has an invalid quantity") from None
        if not as_float.is_integer() or as_float < 1:
            raise InvalidInput("Quantity must be a positive number", details={"item": position})

        try:
            price = float(item.get("price"))
        except (TypeError, ValueError):
            raise InvalidInput(f"Item {position} has an invalid price") from None
        if price < 0 or price != price:
            raise InvalidInput("Price cannot be negative", details={"item": position})

        normalized.append({"product_id": str(product_id), "quantity": int(as_float), "price": price})
    return normalized


@bakery.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text()  # JSON: list of {product_id, quantity, price}
    amount = Float()
    address = Text()  # JSON: {street, city, state, postal_code, country}
    payment_method = String(max_length=50, default="COD")
    payment = Boolean(default=False)
    verify_total = Boolean(default=True)


@bakery.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = json.loads(command.items) if command.items else None
        address = json.loads(command.address) if command.address else None

        validate_checkout(items, command.amount, address)
        line_items = normalize_items(items)

        amount = float(command.amount)
        subtotal = sum(item["price"] * item["quantity"] for item in line_items)
        if command.verify_total and amount + 1e-9 < subtotal:
            raise InvalidInput(
                "Order amount is less than the item total",
                details={"amount": amount, "itemTotal": round(subtotal, 2)},
            )

        user_repo = current_domain.repository_for(User)
        try:
            user = user_repo.get(command.user_id)
        except ObjectNotFoundError:
            raise Unauthorized("User not found") from None

        order = Order.place(
            user_id=command.user_id,
            items=line_items,
            amount=amount,
            address={name: str(address[name]).strip() for name in ADDRESS_FIELDS},
            payment_method=command.payment_method,
            payment=command.payment,
        )
        current_domain.repository_for(Order).add(order)

        user.clear_cart()
        user_repo.add(user)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            amount=amount,
            item_count=len(line_items),
        )
        return str(order.id)
