"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.

Author: TM3
Date: 2026-10-19
"""
from typing import List, Optional, Tuple, Dict, Iterable
from marketlink.domain.product import Product
from marketlink.core.database import get_db_connection_dict

PRODUCT_COLUMNS = """
    id, supplier_id, name, description, category, price,
    is_active, created_at, updated_at
"""


class ProductRepository:
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Product ID

        Returns:
            Product or None if not found
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = %s
            """, (product_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return Product(**row)

        finally:
            cursor.close()
            conn.close()

    def find_by_ids(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        """
        Find several products in one query

        Returns:
            Dict of product ID -> Product (missing IDs are simply absent)
        """
        product_ids = list(dict.fromkeys(product_ids))
        if not product_ids:
            return {}

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = ANY(%s)
            """, (product_ids,))

            return {row['id']: Product(**row) for row in cursor.fetchall()}

        finally:
            cursor.close()
            conn.close()

    def find_all(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        supplier_id: Optional[str] = None,
        is_active: Optional[bool] = True,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Product], int]:
        """
        Find products with filters

        Args:
            search: Search in name, description or category
            category: Filter by category
            supplier_id: Filter by owning supplier
            is_active: Filter by listed status (None for all)
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of products, total count)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = []
            params = []

            if search:
                conditions.append("(name ILIKE %s OR description ILIKE %s OR category ILIKE %s)")
                search_param = f"%{search}%"
                params.extend([search_param, search_param, search_param])

            if category:
                conditions.append("category = %s")
                params.append(category)

            if supplier_id:
                conditions.append("supplier_id = %s")
                params.append(supplier_id)

            if is_active is not None:
                conditions.append("is_active = %s")
                params.append(is_active)

            where_clause = " AND ".join(conditions) if conditions else "1=1"

            # Get total count
            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM products
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE {where_clause}
                ORDER BY name
                LIMIT %s OFFSET %s
            """, params + [limit, offset])

            products = [Product(**row) for row in cursor.fetchall()]
            return products, total

        finally:
            cursor.close()
            conn.close()
