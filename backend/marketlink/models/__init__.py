"""
Modelos de base de datos
"""
from .catalog import Supplier, Supermarket, Product
from .order import Order, OrderItem

__all__ = [
    "Supplier",
    "Supermarket",
    "Product",
    "Order",
    "OrderItem",
]
