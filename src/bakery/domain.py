"""Bakery storefront domain: users, catalogue, carts and orders.

A single Protean domain holds every aggregate so that checkout can write the
new Order and the emptied cart of its User inside one unit of work.
"""

from protean.domain import Domain

from bakery.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

bakery = Domain(name="bakery")
