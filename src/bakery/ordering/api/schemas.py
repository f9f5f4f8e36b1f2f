"""Pydantic request/response schemas for the cart and order APIs."""

from typing import Any

from pydantic import Field, field_validator

from bakery.shared.schemas import CamelModel

# --- Request Schemas ---


class CartItemRequest(CamelModel):
    item_id: str | None = None
    quantity: int | None = None

    @field_validator("quantity", mode="before")
    @classmethod
    def reject_boolean_quantity(cls, value):
        # JSON true/false would otherwise coerce to 1/0
        if isinstance(value, bool):
            raise ValueError("Quantity must be a whole number")
        return value


class PlaceOrderRequest(CamelModel):
    """Checkout payload.

    Items and address are kept loose here so the placement workflow can
    report exactly which parts are missing.
    """

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"productId": "p-1", "quantity": 2, "price": 120.0}],
                    "amount": 290.0,
                    "address": {
                        "street": "12 MG Road",
                        "city": "Pune",
                        "state": "MH",
                        "postalCode": "411001",
                        "country": "India",
                    },
                    "paymentMethod": "COD",
                }
            ]
        }
    }

    items: list[Any] | None = None
    amount: float | None = None
    address: dict[str, Any] | None = None
    payment_method: str = "COD"
    payment: bool = False


class UpdateStatusRequest(CamelModel):
    order_id: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)


# --- Response Schemas ---


class CartResponse(CamelModel):
    success: bool = True
    message: str | None = None
    cart_data: dict[str, int]


class CartCountResponse(CamelModel):
    success: bool = True
    count: int
    unique_items: int


class PlaceOrderResponse(CamelModel):
    success: bool = True
    message: str = "Order placed successfully"
    order_id: str


class OrdersResponse(CamelModel):
    success: bool = True
    orders: list[dict[str, Any]]


class OrderResponse(CamelModel):
    success: bool = True
    message: str | None = None
    order: dict[str, Any]


class InvoiceSentResponse(CamelModel):
    success: bool = True
    message: str = "Invoice sent successfully"
    message_id: str | None = None
