"""
Order submission from the dashboard cart

Author: TM3
Date: 2026-10-19
"""
import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from marketlink.core.exceptions import (
    EmptyCartError,
    InvalidPaymentMethodError,
    MissingAddressError,
    MissingSupplierError,
    ValidationError,
)
from marketlink.dashboard.api_client import MarketLinkClient
from marketlink.dashboard.cart import Cart, CheckoutDetails
from marketlink.domain.order import Order, OrderCreate, OrderLineCreate, PaymentMethod

logger = logging.getLogger(__name__)


def resolve_payment_method(value: Optional[str]) -> PaymentMethod:
    """Unset means cash; anything outside cash/card/bank is rejected"""
    if value is None or not str(value).strip():
        return PaymentMethod.CASH
    try:
        return PaymentMethod(str(value).strip().lower())
    except ValueError:
        raise InvalidPaymentMethodError()


class OrderSubmitter:
    """
    Turns the cart plus checkout details into an order request

    Validation failures and rejected submissions leave the cart untouched;
    an accepted order clears it.
    """

    def __init__(self, client: MarketLinkClient):
        self.client = client

    def build_request(self, cart: Cart, details: CheckoutDetails) -> OrderCreate:
        """
        Validate and build the OrderCreate payload

        Prices are the ones captured on the cart lines, not a fresh catalog read.

        Raises:
            EmptyCartError, MissingSupplierError, MissingAddressError,
            InvalidPaymentMethodError, ValidationError
        """
        if cart.is_empty:
            raise EmptyCartError()

        supplier_id = cart.supplier_id()
        if not supplier_id:
            raise MissingSupplierError()

        address = (details.delivery_address or "").strip()
        if not address:
            raise MissingAddressError()

        payment_method = resolve_payment_method(details.payment_method)

        try:
            return OrderCreate(
                supplier_id=supplier_id,
                items=[
                    OrderLineCreate(
                        product_id=line.item.id,
                        qty=line.quantity,
                        price=line.item.price or 0,
                    )
                    for line in cart.lines()
                ],
                delivery_address=address,
                delivery_date=details.delivery_date or None,
                payment_method=payment_method,
                note=details.note or "",
                total_amount=cart.total(),
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid order: {e.errors()[0]['msg']}")

    async def submit(self, cart: Cart, details: CheckoutDetails = None) -> Order:
        """
        Submit the cart as an order

        Args:
            cart: Cart to submit
            details: Checkout form values (defaults to the cart's pending form)

        Returns:
            The created Order

        Raises:
            ValidationError subclasses before any request is sent,
            NetworkOrServerError when the backend rejects the order
        """
        details = details or cart.checkout
        request = self.build_request(cart, details)

        order = await self.client.create_order(request)

        logger.info(f"Order {order.id} placed with supplier {request.supplier_id}")
        cart.clear()
        return order
