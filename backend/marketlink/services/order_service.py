"""
Order Service
Validates and stores orders placed from the supermarket dashboard and
handles supplier status changes

Author: TM3
Date: 2026-10-19
"""
import logging
from typing import Optional

from marketlink.core.exceptions import (
    EmptyCartError,
    MissingAddressError,
    MissingSupplierError,
    MixedSupplierError,
    OrderNotFoundError,
    ProductNotFoundError,
    ValidationError,
)
from marketlink.domain.order import Order, OrderCreate
from marketlink.repositories.order_repository import OrderRepository
from marketlink.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class OrderService:
    """
    Service for order creation and status updates

    Handles:
    - Request validation (items, supplier, delivery address)
    - Single-supplier check against the catalog
    - Product name snapshot and total computation
    - Status changes restricted to the order's supplier
    """

    def __init__(
        self,
        order_repository: OrderRepository = None,
        product_repository: ProductRepository = None
    ):
        self.order_repository = order_repository or OrderRepository()
        self.product_repository = product_repository or ProductRepository()

    def create_order(self, supermarket_id: str, request: OrderCreate) -> Order:
        """
        Create an order for a supermarket

        Args:
            supermarket_id: Buyer placing the order
            request: Checkout payload

        Returns:
            Created Order (status "pending")

        Raises:
            ValidationError subclasses when the request cannot be accepted
        """
        if not request.items:
            raise EmptyCartError()
        if not request.supplier_id:
            raise MissingSupplierError()
        if not request.delivery_address.strip():
            raise MissingAddressError()

        products = self.product_repository.find_by_ids(line.product_id for line in request.items)

        for line in request.items:
            product = products.get(line.product_id)
            if product is None:
                raise ProductNotFoundError(f"Product {line.product_id} not found.")
            if product.supplier_id != request.supplier_id:
                raise MixedSupplierError()

        total = request.computed_total
        if request.total_amount and request.total_amount != total:
            logger.warning(
                f"Order total mismatch for supermarket {supermarket_id}: "
                f"client sent {request.total_amount}, lines sum to {total}"
            )

        order = self.order_repository.create(
            supermarket_id,
            request,
            product_names={pid: p.name for pid, p in products.items()},
            total_amount=total
        )

        logger.info(
            f"Order {order.id} created: supermarket={supermarket_id} "
            f"supplier={request.supplier_id} lines={order.item_count} total={total}"
        )
        return order

    def update_status(self, order_id: str, supplier_id: str, status: str) -> Order:
        """
        Change an order's status

        Any non-empty value is accepted; there is no state machine.

        Raises:
            ValidationError: status is blank
            OrderNotFoundError: no such order for this supplier
        """
        status = (status or "").strip()
        if not status:
            raise ValidationError("Status is required.")

        order: Optional[Order] = self.order_repository.update_status(order_id, supplier_id, status)
        if order is None:
            raise OrderNotFoundError()

        logger.info(f"Order {order_id} status set to '{status}' by supplier {supplier_id}")
        return order
