"""
Unit tests for OrderSubmitter

Author: TM3
Date: 2026-10-19
"""
import asyncio
import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from marketlink.core.exceptions import (
    EmptyCartError,
    InvalidPaymentMethodError,
    MissingAddressError,
    MissingSupplierError,
    NetworkOrServerError,
    ValidationError,
)
from marketlink.dashboard.cart import Cart, CheckoutDetails
from marketlink.dashboard.checkout import OrderSubmitter, resolve_payment_method
from marketlink.domain.order import Order, PaymentMethod


@pytest.fixture
def client():
    client = MagicMock()
    client.create_order = AsyncMock(side_effect=lambda request: Order(
        id="O1",
        supplier_id=request.supplier_id,
        supermarket_id="SM1",
        status="pending",
        total_amount=request.computed_total,
    ))
    return client


@pytest.fixture
def filled_cart(item_a, item_c):
    cart = Cart()
    cart.add(item_a)
    cart.add(item_c)
    cart.set_quantity("C", 4)
    return cart


def details(**overrides):
    values = {"delivery_address": "45 Temple St, Kandy"}
    values.update(overrides)
    return CheckoutDetails(**values)


class TestBuildRequest:

    def test_snapshot_of_lines_and_total(self, client, filled_cart):
        request = OrderSubmitter(client).build_request(filled_cart, details(note="Back gate"))

        assert request.supplier_id == "S1"
        assert [(line.product_id, line.qty, line.price) for line in request.items] == [
            ("A", 1, Decimal("10.00")),
            ("C", 4, Decimal("2.50")),
        ]
        assert request.total_amount == Decimal("20.00")
        assert request.payment_method == PaymentMethod.CASH
        assert request.note == "Back gate"

    def test_empty_cart(self, client):
        with pytest.raises(EmptyCartError):
            OrderSubmitter(client).build_request(Cart(), details())

    @pytest.mark.parametrize("address", ["", "   ", "\n\t"])
    def test_blank_address(self, client, filled_cart, address):
        with pytest.raises(MissingAddressError):
            OrderSubmitter(client).build_request(filled_cart, details(delivery_address=address))

    def test_missing_supplier(self, client, item_a):
        cart = Cart()
        cart.add(item_a)
        # Simulate a line whose item lost its supplier after being added
        cart.get("A").item = item_a.model_copy(update={"supplier_id": None})

        with pytest.raises(MissingSupplierError):
            OrderSubmitter(client).build_request(cart, details())

    def test_invalid_delivery_date(self, client, filled_cart):
        with pytest.raises(ValidationError):
            OrderSubmitter(client).build_request(filled_cart, details(delivery_date="next tuesday"))

    def test_blank_delivery_date_is_omitted(self, client, filled_cart):
        request = OrderSubmitter(client).build_request(filled_cart, details(delivery_date=""))

        assert request.delivery_date is None


class TestPaymentMethod:

    @pytest.mark.parametrize("value, expected", [
        (None, PaymentMethod.CASH),
        ("", PaymentMethod.CASH),
        ("card", PaymentMethod.CARD),
        ("BANK", PaymentMethod.BANK),
    ])
    def test_accepted_values(self, value, expected):
        assert resolve_payment_method(value) == expected

    def test_unknown_method_rejected(self):
        with pytest.raises(InvalidPaymentMethodError):
            resolve_payment_method("crypto")


class TestSubmit:

    def test_success_clears_cart_and_returns_order(self, client, filled_cart):
        order = asyncio.run(OrderSubmitter(client).submit(filled_cart, details()))

        assert order.id == "O1"
        assert order.total_amount == Decimal("20.00")
        assert filled_cart.is_empty
        client.create_order.assert_awaited_once()

    def test_uses_pending_checkout_form_by_default(self, client, filled_cart):
        filled_cart.checkout = details(payment_method="card")

        asyncio.run(OrderSubmitter(client).submit(filled_cart))

        request = client.create_order.await_args.args[0]
        assert request.payment_method == PaymentMethod.CARD

    def test_blank_address_leaves_cart_unchanged(self, client, filled_cart):
        with pytest.raises(MissingAddressError):
            asyncio.run(OrderSubmitter(client).submit(filled_cart, details(delivery_address="   ")))

        assert len(filled_cart) == 2
        assert filled_cart.get("C").quantity == 4
        client.create_order.assert_not_awaited()

    def test_rejected_submission_leaves_cart_intact(self, client, filled_cart):
        client.create_order = AsyncMock(side_effect=NetworkOrServerError("Order failed", status_code=500))

        with pytest.raises(NetworkOrServerError):
            asyncio.run(OrderSubmitter(client).submit(filled_cart, details()))

        assert filled_cart.total() == Decimal("20.00")
