"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.

Author: TM3
Date: 2026-10-19
"""
from marketlink.repositories.product_repository import ProductRepository
from marketlink.repositories.order_repository import OrderRepository
from marketlink.repositories.supermarket_repository import SupermarketRepository

__all__ = [
    'ProductRepository',
    'OrderRepository',
    'SupermarketRepository',
]
