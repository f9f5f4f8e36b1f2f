"""FastAPI endpoints for the cart and orders."""

import json

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from protean.utils.globals import current_domain
from starlette.concurrency import run_in_threadpool

from bakery.errors import Forbidden, NotFound
from bakery.identity.tokens import Capability, Principal
from bakery.identity.user import User
from bakery.invoicing.delivery import send_invoice
from bakery.invoicing.invoice import gather_invoice, invoice_for, load_order
from bakery.invoicing.template import InvoiceTemplate
from bakery.ordering.api.schemas import (
    CartCountResponse,
    CartItemRequest,
    CartResponse,
    InvoiceSentResponse,
    OrderResponse,
    OrdersResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    UpdateStatusRequest,
)
from bakery.ordering.cart import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from bakery.ordering.placement import PlaceOrder
from bakery.ordering.queries import all_orders, orders_for_user
from bakery.ordering.status import UpdateOrderStatus
from bakery.shared.dependencies import get_current_user, get_principal, get_services, require_admin

cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])

_ADDRESS_ALIASES = {"postalCode": "postal_code", "zipcode": "postal_code", "zipCode": "postal_code"}


def _address_payload(address: dict | None) -> dict | None:
    if address is None:
        return None
    return {_ADDRESS_ALIASES.get(key, key): value for key, value in address.items()}


# --- Cart endpoints ---


@cart_router.post("/add", response_model=CartResponse)
async def add_to_cart(body: CartItemRequest, user: User = Depends(get_current_user)) -> CartResponse:
    command = AddToCart(
        user_id=str(user.id),
        item_id=body.item_id,
        quantity=body.quantity if body.quantity is not None else 1,
    )
    cart = current_domain.process(command, asynchronous=False)
    return CartResponse(message="Added to cart", cart_data=cart)


@cart_router.post("/update", response_model=CartResponse)
async def update_cart(body: CartItemRequest, user: User = Depends(get_current_user)) -> CartResponse:
    command = UpdateCartItem(user_id=str(user.id), item_id=body.item_id, quantity=body.quantity)
    cart = current_domain.process(command, asynchronous=False)
    message = "Item removed from cart" if body.quantity == 0 else "Cart updated"
    return CartResponse(message=message, cart_data=cart)


@cart_router.post("/remove", response_model=CartResponse)
async def remove_from_cart(body: CartItemRequest, user: User = Depends(get_current_user)) -> CartResponse:
    command = RemoveFromCart(user_id=str(user.id), item_id=body.item_id)
    cart = current_domain.process(command, asynchronous=False)
    return CartResponse(message="Item removed from cart", cart_data=cart)


@cart_router.post("/get", response_model=CartResponse)
async def get_cart(user: User = Depends(get_current_user)) -> CartResponse:
    return CartResponse(message="Cart retrieved", cart_data=user.cart)


@cart_router.post("/clear", response_model=CartResponse)
async def clear_cart(user: User = Depends(get_current_user)) -> CartResponse:
    cart = current_domain.process(ClearCart(user_id=str(user.id)), asynchronous=False)
    return CartResponse(message="Cart cleared", cart_data=cart)


@cart_router.post("/count", response_model=CartCountResponse)
async def cart_count(user: User = Depends(get_current_user)) -> CartCountResponse:
    count, unique_items = user.cart_count()
    return CartCountResponse(count=count, unique_items=unique_items)


# --- Order endpoints ---


@order_router.post("/place", status_code=201, response_model=PlaceOrderResponse)
async def place_order(body: PlaceOrderRequest, services=Depends(get_services), user: User = Depends(get_current_user)):
    command = PlaceOrder(
        user_id=str(user.id),
        items=json.dumps(body.items) if body.items is not None else None,
        amount=body.amount,
        address=json.dumps(_address_payload(body.address)) if body.address is not None else None,
        payment_method=body.payment_method or "COD",
        payment=body.payment,
        verify_total=services.settings.enforce_order_total,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return PlaceOrderResponse(order_id=order_id)


@order_router.get("/user-orders", response_model=OrdersResponse)
async def user_orders(user: User = Depends(get_current_user)) -> OrdersResponse:
    return OrdersResponse(orders=orders_for_user(user.id))


@order_router.get("/all", response_model=OrdersResponse, dependencies=[Depends(require_admin)])
async def list_all_orders() -> OrdersResponse:
    return OrdersResponse(orders=all_orders())


@order_router.put("/update-status", response_model=OrderResponse, dependencies=[Depends(require_admin)])
async def update_status(body: UpdateStatusRequest) -> OrderResponse:
    order = current_domain.process(
        UpdateOrderStatus(order_id=body.order_id, status=body.status),
        asynchronous=False,
    )
    return OrderResponse(message="Status updated", order=order)


@order_router.get("/invoice/{order_id}", response_class=HTMLResponse)
async def download_invoice(order_id: str, principal: Principal = Depends(get_principal)) -> HTMLResponse:
    if principal.has(Capability.ADMIN):
        order = load_order(order_id)
    else:
        # A missing order and someone else's order answer the same way
        try:
            order = load_order(order_id)
        except NotFound:
            order = None
        if order is None or principal.user is None or str(principal.user.id) != str(order.user_id):
            raise Forbidden("You can only download invoices for your own orders")

    data = invoice_for(order)
    content = InvoiceTemplate.render(data)
    return HTMLResponse(
        content=content["html_body"],
        headers={"Content-Disposition": f'attachment; filename="invoice-{data.order_id}.html"'},
    )


@order_router.post(
    "/send-invoice/{order_id}",
    response_model=InvoiceSentResponse,
    dependencies=[Depends(require_admin)],
)
async def email_invoice(order_id: str, services=Depends(get_services)) -> InvoiceSentResponse:
    data, _ = gather_invoice(order_id)
    message_id = await run_in_threadpool(send_invoice, services.email, data)
    return InvoiceSentResponse(message_id=message_id)
