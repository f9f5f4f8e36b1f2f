"""Catalog management: admin commands for adding and removing products."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from bakery.catalogue.product import Product
from bakery.domain import bakery
from bakery.errors import InvalidInput, NotFound

logger = structlog.get_logger(__name__)

_TRUE_STRINGS = {"true", "1", "yes", "on"}


def validate_product_form(name, description, price, category, popular=None) -> dict:
    """Check the add-product form and return cleaned values.

    Multipart forms deliver everything as text, so price and the popular
    flag are parsed here.
    """
    errors = []
    if not name or not str(name).strip():
        errors.append("Product name is required")
    if not description or not str(description).strip():
        errors.append("Product description is required")
    if not category or not str(category).strip():
        errors.append("Product category is required")

    parsed_price = None
    if price is None or str(price).strip() == "":
        errors.append("Product price is required")
    else:
        try:
            parsed_price = float(price)
        except (TypeError, ValueError):
            parsed_price = None
        if parsed_price is None or parsed_price != parsed_price or parsed_price <= 0:
            errors.append("Price must be a positive number")

    if errors:
        raise InvalidInput("Validation failed", details=errors)

    if isinstance(popular, str):
        popular = popular.strip().lower() in _TRUE_STRINGS

    return {
        "name": str(name).strip(),
        "description": str(description).strip(),
        "price": parsed_price,
        "category": str(category).strip().lower(),
        "popular": bool(popular),
    }


@bakery.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=200)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    image: String(required=True, max_length=1024)
    category: String(required=True, max_length=100)
    popular: Boolean(default=False)


@bakery.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


@bakery.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            description=command.description,
            price=command.price,
            image=command.image,
            category=command.category,
            popular=command.popular,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product added", product_id=str(product.id), category=product.category)
        return product.to_dict()

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        try:
            product = repo.get(command.product_id)
        except ObjectNotFoundError:
            raise NotFound("Product not found") from None

        # Orders keep their own price copies; no reference check is made
        repo._dao.delete(product)

        logger.info("Product removed", product_id=str(command.product_id))
        return str(command.product_id)
