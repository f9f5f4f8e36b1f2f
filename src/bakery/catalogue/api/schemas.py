"""Pydantic response schemas for the catalog API."""

from datetime import datetime

from bakery.shared.schemas import CamelModel


class ProductView(CamelModel):
    id: str
    name: str
    description: str
    price: float
    image: str
    category: str
    popular: bool = False
    created_at: datetime | None = None


class ProductResponse(CamelModel):
    success: bool = True
    message: str | None = None
    product: ProductView


class ProductListResponse(CamelModel):
    success: bool = True
    products: list[ProductView]
