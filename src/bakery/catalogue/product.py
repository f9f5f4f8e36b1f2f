"""Product aggregate: an item on sale in the bakery."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Float, String, Text

from bakery.domain import bakery


@bakery.aggregate
class Product:
    """A catalog entry.

    The price here is the list price; orders keep their own copy of the price
    paid, so changing or deleting a product never rewrites order history.
    """

    name: String(required=True, max_length=200)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    image: String(required=True, max_length=1024)
    category: String(required=True, max_length=100)
    popular: Boolean(default=False)
    created_at: DateTime()

    @classmethod
    def add(cls, name, description, price, image, category, popular=False):
        from bakery.catalogue.events import ProductAdded

        now = datetime.now(UTC)
        product = cls(
            name=name.strip(),
            description=description.strip(),
            price=price,
            image=image,
            category=category.strip().lower(),
            popular=bool(popular),
            created_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=product.name,
                price=product.price,
                category=product.category,
                created_at=now,
            )
        )
        return product

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "image": self.image,
            "category": self.category,
            "popular": bool(self.popular),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@bakery.repository(part_of=Product)
class ProductRepository:
    def list_newest(self) -> list[Product]:
        return self._dao.query.order_by("-created_at").all().items

    def names_for(self, product_ids) -> dict[str, str]:
        """Map each known id to its product name; unknown ids are left out."""
        ids = {str(pid) for pid in product_ids if pid}
        if not ids:
            return {}
        products = self._dao.query.filter(id__in=list(ids)).all().items
        return {str(p.id): p.name for p in products}
