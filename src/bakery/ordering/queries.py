"""Read-side helpers for listing orders."""

from protean.utils.globals import current_domain

from bakery.catalogue.product import Product
from bakery.ordering.order import Order


def product_names_for(orders) -> dict[str, str]:
    ids = {str(item.product_id) for order in orders for item in order.items}
    return current_domain.repository_for(Product).names_for(ids)


def orders_for_user(user_id) -> list[dict]:
    """The user's orders, newest first, with product names on each line."""
    orders = current_domain.repository_for(Order).for_user(user_id)
    names = product_names_for(orders)
    return [order.to_dict(product_names=names) for order in orders]


def all_orders() -> list[dict]:
    orders = current_domain.repository_for(Order).newest_first()
    names = product_names_for(orders)
    return [order.to_dict(product_names=names) for order in orders]
