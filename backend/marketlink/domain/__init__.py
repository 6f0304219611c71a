"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application
and are shared with the dashboard client.

Author: TM3
Date: 2026-10-19
"""
from marketlink.domain.product import Product
from marketlink.domain.order import (
    Order,
    OrderItem,
    OrderCreate,
    OrderLineCreate,
    OrderStatusUpdate,
    PaymentMethod,
)
from marketlink.domain.supermarket import Supermarket, Supplier, BuyerSummary

__all__ = [
    'Product',
    'Order',
    'OrderItem',
    'OrderCreate',
    'OrderLineCreate',
    'OrderStatusUpdate',
    'PaymentMethod',
    'Supermarket',
    'Supplier',
    'BuyerSummary',
]
