"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from bakery.domain import bakery


@bakery.event(part_of="Product")
class ProductAdded:
    """A product was put on sale."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    category: String(required=True)
    created_at: DateTime(required=True)
