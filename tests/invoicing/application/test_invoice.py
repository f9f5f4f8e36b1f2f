"""Application tests for assembling and emailing invoices."""

import json

import pytest
from protean import current_domain

from bakery.catalogue.management import RemoveProduct
from bakery.errors import NotFound, UpstreamFailure
from bakery.invoicing.delivery import send_invoice
from bakery.invoicing.invoice import gather_invoice, invoice_for, load_order
from bakery.notifications.fake_email import FakeEmailAdapter
from bakery.ordering.placement import PlaceOrder

ADDRESS = {"street": "1 Main St", "city": "Pune", "state": "MH", "postal_code": "411001", "country": "India"}


def _place(user_id, items, amount):
    return current_domain.process(
        PlaceOrder(user_id=user_id, items=json.dumps(items), amount=amount, address=json.dumps(ADDRESS)),
        asynchronous=False,
    )


class TestGatherInvoice:
    def test_deleted_product_shows_unknown_and_keeps_stored_prices(self, make_user, make_product):
        user = make_user()
        product = make_product(name="Baguette", price=100.0)
        order_id = _place(user.id, [{"product_id": str(product.id), "quantity": 2, "price": 80.0}], amount=180.0)

        current_domain.process(RemoveProduct(product_id=str(product.id)), asynchronous=False)

        data, _ = gather_invoice(order_id)
        assert data.lines[0].product_name == "Unknown Product"
        assert data.lines[0].unit_price == 80.0
        assert data.lines[0].line_total == 160.0
        assert data.grand_total == 180.0

    def test_customer_details(self, make_user, make_product):
        user = make_user(name="Asha", email="asha@example.com")
        product = make_product(name="Baguette")
        order_id = _place(user.id, [{"product_id": str(product.id), "quantity": 1, "price": 100.0}], amount=100.0)

        data, order = gather_invoice(order_id)
        assert data.customer_email == "asha@example.com"
        assert data.lines[0].product_name == "Baguette"
        assert data.address_lines[0] == "1 Main St"
        assert str(order.user_id) == str(user.id)

    def test_unknown_order(self):
        with pytest.raises(NotFound) as exc:
            gather_invoice("missing")
        assert exc.value.message == "Order not found"


class TestSendInvoice:
    def test_sends_text_and_html(self, make_user):
        user = make_user(email="asha@example.com")
        order_id = _place(user.id, [{"product_id": "p-1", "quantity": 1, "price": 10.0}], amount=10.0)
        email = FakeEmailAdapter()

        data, _ = gather_invoice(order_id)
        message_id = send_invoice(email, data)

        assert message_id == email.outbox[0]["message_id"]
        sent = email.outbox[0]
        assert sent["to"] == "asha@example.com"
        assert sent["subject"] == f"Order Invoice #{order_id}"
        assert sent["html_body"].startswith("<!DOCTYPE html>")

    def test_failed_delivery(self, make_user):
        user = make_user()
        order_id = _place(user.id, [{"product_id": "p-1", "quantity": 1, "price": 10.0}], amount=10.0)
        email = FakeEmailAdapter()
        email.configure(should_succeed=False)

        data, _ = gather_invoice(order_id)
        with pytest.raises(UpstreamFailure) as exc:
            send_invoice(email, data)
        assert exc.value.message == "Error sending invoice"
        assert email.outbox == []


class TestLoadOrder:
    def test_invoice_for_loaded_order(self, make_user):
        user = make_user(email="asha@example.com")
        order_id = _place(user.id, [{"product_id": "p-1", "quantity": 3, "price": 10.0}], amount=30.0)

        data = invoice_for(load_order(order_id))

        assert data.order_id == order_id
        assert data.computed_total == 30.0

    def test_missing_order(self):
        with pytest.raises(NotFound):
            load_order("missing")
